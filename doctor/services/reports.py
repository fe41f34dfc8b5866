"""
Medical report workflow for senior doctors.

:class:`DoctorService` is the only place where report fields change
state: approving, rejecting, appending notes and the generic
create/update/delete operations. Every mutating call runs in its own
transaction; concurrent approve/reject calls on one report are
last-write-wins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from django.db import transaction
from rest_framework.exceptions import ValidationError

from doctor.exceptions import ReferenceConflict, ResourceNotFound
from doctor.models import DonorMedicalReport
from doctor.repositories import DoctorRepository, DonorMedicalReportRepository, DonorRepository

logger = logging.getLogger(__name__)

NOTES_SEPARATOR = '\n\n'

UPDATABLE_FIELDS = ('donor_id', 'doctor_id', 'doctor_notes', 'health_status', 'is_approved', 'appointment_date')


@dataclass(frozen=True)
class DoctorStatistics:
    total_reports: int
    approved_reports: int
    rejected_reports: int


class DoctorService:

    def __init__(self, reports: Optional[DonorMedicalReportRepository] = None,
                 doctors: Optional[DoctorRepository] = None,
                 donors: Optional[DonorRepository] = None):
        self.reports = reports or DonorMedicalReportRepository()
        self.doctors = doctors or DoctorRepository()
        self.donors = donors or DonorRepository()

    def _load(self, report_id: int) -> DonorMedicalReport:
        report = self.reports.find_by_id(report_id)
        if report is None:
            raise ResourceNotFound(f'Medical report not found with id: {report_id}')
        return report

    def _check_references(self, donor_id: int, doctor_id: int) -> None:
        if not self.donors.exists_by_id(donor_id):
            raise ReferenceConflict(f'Donor not found with id: {donor_id}')
        if not self.doctors.exists_by_id(doctor_id):
            raise ReferenceConflict(f'Doctor not found with id: {doctor_id}')

    # --- state transitions -------------------------------------------------

    @transaction.atomic
    def approve_donation(self, report_id: int) -> DonorMedicalReport:
        report = self._load(report_id)
        report.is_approved = True
        report.health_status = DonorMedicalReport.FIT_TO_DONATE
        report = self.reports.save(report)
        logger.info('report %s approved (donor=%s doctor=%s)', report.id, report.donor_id, report.doctor_id)
        return report

    @transaction.atomic
    def reject_donation(self, report_id: int) -> DonorMedicalReport:
        report = self._load(report_id)
        report.is_approved = False
        report.health_status = DonorMedicalReport.UNFIT
        report = self.reports.save(report)
        logger.info('report %s rejected (donor=%s doctor=%s)', report.id, report.donor_id, report.doctor_id)
        return report

    @transaction.atomic
    def add_medical_notes(self, report_id: int, notes: str) -> DonorMedicalReport:
        """Append ``notes`` to the report, separated from earlier notes by a blank line.

        The combined text must still fit the notes column; a longer result
        is rejected and the report is left as it was.
        """
        report = self._load(report_id)
        existing = report.doctor_notes or ''
        combined = notes if not existing else f'{existing}{NOTES_SEPARATOR}{notes}'
        if len(combined) > DonorMedicalReport.NOTES_MAX_LENGTH:
            raise ValidationError({
                'doctorNotes': [
                    f'Doctor notes must not exceed {DonorMedicalReport.NOTES_MAX_LENGTH} characters '
                    f'(would be {len(combined)}).'
                ]
            })
        report.doctor_notes = combined
        report = self.reports.save(report)
        logger.info('notes added to report %s (%d chars)', report.id, len(combined))
        return report

    # --- reads -------------------------------------------------------------

    def get_medical_report_by_id(self, report_id: int) -> DonorMedicalReport:
        return self._load(report_id)

    def get_medical_report(self, donor_id: int) -> DonorMedicalReport:
        report = self.reports.find_by_donor_id(donor_id)
        if report is None:
            raise ResourceNotFound(f'Medical report not found for donor id: {donor_id}')
        return report

    def get_latest_medical_report(self, donor_id: int) -> DonorMedicalReport:
        report = self.reports.find_latest_by_donor_id(donor_id)
        if report is None:
            raise ResourceNotFound(f'No medical report found for donor id: {donor_id}')
        return report

    def get_medical_reports_by_doctor(self, doctor_id: int) -> list[DonorMedicalReport]:
        return self.reports.find_by_doctor_id(doctor_id)

    def get_approved_medical_reports(self) -> list[DonorMedicalReport]:
        return self.reports.find_by_approval(True)

    def get_unapproved_medical_reports(self) -> list[DonorMedicalReport]:
        return self.reports.find_by_approval(False)

    def get_medical_reports_by_health_status(self, health_status: str) -> list[DonorMedicalReport]:
        return self.reports.find_by_health_status(health_status)

    def get_medical_reports_by_appointment_range(self, start: datetime, end: datetime) -> list[DonorMedicalReport]:
        return self.reports.find_by_appointment_range(start, end)

    def has_medical_report(self, donor_id: int) -> bool:
        return self.reports.find_by_donor_id(donor_id) is not None

    def get_doctor_statistics(self, doctor_id: int) -> DoctorStatistics:
        total = self.reports.count_by_doctor_id(doctor_id)
        approved = self.reports.count_by_doctor_id_and_approved(doctor_id)
        return DoctorStatistics(total_reports=total, approved_reports=approved, rejected_reports=total - approved)

    # --- generic writes ----------------------------------------------------

    @transaction.atomic
    def create_medical_report(self, *, donor_id: int, doctor_id: int, doctor_notes: Optional[str] = None,
                              health_status: Optional[str] = None, is_approved: bool = False,
                              appointment_date: Optional[datetime] = None) -> DonorMedicalReport:
        self._check_references(donor_id, doctor_id)
        report = DonorMedicalReport(
            donor_id=donor_id,
            doctor_id=doctor_id,
            doctor_notes=doctor_notes,
            health_status=health_status,
            is_approved=bool(is_approved),
            appointment_date=appointment_date,
        )
        report = self.reports.save(report)
        logger.info('report %s created for donor %s by doctor %s', report.id, donor_id, doctor_id)
        return report

    @transaction.atomic
    def update_medical_report(self, report_id: int, **fields) -> DonorMedicalReport:
        report = self._load(report_id)
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f'cannot update fields: {sorted(unknown)}')
        for name, value in fields.items():
            setattr(report, name, value)
        self._check_references(report.donor_id, report.doctor_id)
        report = self.reports.save(report)
        logger.info('report %s updated (%s)', report.id, ', '.join(sorted(fields)) or 'no fields')
        return report

    @transaction.atomic
    def delete_medical_report(self, report_id: int) -> None:
        if not self.reports.exists_by_id(report_id):
            raise ResourceNotFound(f'Medical report not found with id: {report_id}')
        self.reports.delete_by_id(report_id)
        logger.info('report %s deleted', report_id)


def format_report(report: DonorMedicalReport) -> dict:
    return {
        'id': report.id,
        'donorId': report.donor_id,
        'doctorId': report.doctor_id,
        'doctorNotes': report.doctor_notes,
        'healthStatus': report.health_status,
        'isApproved': report.is_approved,
        'appointmentDate': report.appointment_date.isoformat() if report.appointment_date else None,
        'createdAt': report.created_at.isoformat() if report.created_at else None,
        'updatedAt': report.updated_at.isoformat() if report.updated_at else None,
    }


def format_statistics(stats: DoctorStatistics) -> dict:
    return {
        'totalReports': stats.total_reports,
        'approvedReports': stats.approved_reports,
        'rejectedReports': stats.rejected_reports,
    }
