"""
Data access for doctors, donors and donor medical reports.

Repositories wrap the ORM so the service layer can be handed a different
store in tests. Reads never write; every write touches a single row.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from doctor.models import Doctor, Donor, DonorMedicalReport

logger = logging.getLogger(__name__)


class DonorMedicalReportRepository:

    model = DonorMedicalReport

    def _qs(self):
        return self.model.objects.all()

    def find_by_id(self, report_id: int) -> Optional[DonorMedicalReport]:
        return self._qs().filter(pk=report_id).first()

    def find_by_donor_id(self, donor_id: int) -> Optional[DonorMedicalReport]:
        """Return the donor's report, assuming there is only one.

        Donors can accumulate several reports. When that happens the
        oldest one (lowest id) is returned and a warning is logged;
        callers after the current assessment should use
        :meth:`find_latest_by_donor_id`.
        """
        reports = list(self._qs().filter(donor_id=donor_id).order_by('id')[:2])
        if not reports:
            return None
        if len(reports) > 1:
            logger.warning('donor %s has several medical reports; returning report %s', donor_id, reports[0].id)
        return reports[0]

    def find_latest_by_donor_id(self, donor_id: int) -> Optional[DonorMedicalReport]:
        return self._qs().filter(donor_id=donor_id).order_by('-created_at', '-id').first()

    def find_by_donor_id_and_appointment_date(self, donor_id: int, appointment_date: datetime) -> Optional[DonorMedicalReport]:
        return self._qs().filter(donor_id=donor_id, appointment_date=appointment_date).order_by('id').first()

    def find_by_doctor_id(self, doctor_id: int) -> list[DonorMedicalReport]:
        return list(self._qs().filter(doctor_id=doctor_id).order_by('id'))

    def find_by_approval(self, approved: bool) -> list[DonorMedicalReport]:
        return list(self._qs().filter(is_approved=approved).order_by('id'))

    def find_by_health_status(self, health_status: str) -> list[DonorMedicalReport]:
        # exact, case-sensitive match
        return list(self._qs().filter(health_status=health_status).order_by('id'))

    def find_by_appointment_range(self, start: datetime, end: datetime) -> list[DonorMedicalReport]:
        return list(
            self._qs().filter(appointment_date__gte=start, appointment_date__lte=end).order_by('appointment_date', 'id')
        )

    def count_by_doctor_id(self, doctor_id: int) -> int:
        return self._qs().filter(doctor_id=doctor_id).count()

    def count_by_doctor_id_and_approved(self, doctor_id: int) -> int:
        return self._qs().filter(doctor_id=doctor_id, is_approved=True).count()

    def save(self, report: DonorMedicalReport) -> DonorMedicalReport:
        report.save()
        return report

    def delete_by_id(self, report_id: int) -> bool:
        deleted, _ = self._qs().filter(pk=report_id).delete()
        return deleted > 0

    def exists_by_id(self, report_id: int) -> bool:
        return self._qs().filter(pk=report_id).exists()


class DoctorRepository:

    def find_by_id(self, doctor_id: int) -> Optional[Doctor]:
        return Doctor.objects.filter(pk=doctor_id).first()

    def find_all(self) -> list[Doctor]:
        return list(Doctor.objects.order_by('id'))

    def save(self, doctor: Doctor) -> Doctor:
        doctor.save()
        return doctor

    def delete_by_id(self, doctor_id: int) -> bool:
        # reports referencing the doctor go with it (ON DELETE CASCADE)
        deleted, _ = Doctor.objects.filter(pk=doctor_id).delete()
        return deleted > 0

    def exists_by_id(self, doctor_id: int) -> bool:
        return Doctor.objects.filter(pk=doctor_id).exists()


class DonorRepository:

    def exists_by_id(self, donor_id: int) -> bool:
        return Donor.objects.filter(pk=donor_id).exists()
