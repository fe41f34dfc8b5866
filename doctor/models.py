"""
Database models for the doctor backend.

Doctors review donor medical reports and either approve or reject the
donation. Donors belong to the donor registration subsystem; the model
kept here is the minimal row the report foreign key points at.
"""
from __future__ import annotations

from django.db import models


class Doctor(models.Model):
    """A senior doctor allowed to approve or reject donations."""
    name = models.CharField(max_length=100)
    specialization = models.CharField(max_length=50)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'doctors'

    def __str__(self) -> str:
        return f"{self.name} ({self.specialization})"


class Donor(models.Model):
    """Registered blood donor (owned by the donor subsystem)."""
    name = models.CharField(max_length=100)
    blood_type = models.CharField(max_length=5, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'donors'

    def __str__(self) -> str:
        return f"{self.name} ({self.blood_type or '?'})"


class DonorMedicalReport(models.Model):
    """A doctor's assessment of one donor.

    ``created_at`` is written once on insert; ``updated_at`` is refreshed
    by every ``save()``. A donor may accumulate several reports over time,
    the latest one being the one with the greatest ``created_at``.
    """
    FIT_TO_DONATE = 'Fit to Donate'
    UNFIT = 'Unfit'

    NOTES_MAX_LENGTH = 1000
    HEALTH_STATUS_MAX_LENGTH = 50

    donor = models.ForeignKey(Donor, on_delete=models.CASCADE, related_name='medical_reports')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='medical_reports')
    doctor_notes = models.TextField(max_length=NOTES_MAX_LENGTH, blank=True, null=True)
    health_status = models.CharField(max_length=HEALTH_STATUS_MAX_LENGTH, blank=True, null=True, db_index=True)
    is_approved = models.BooleanField(default=False, db_index=True)
    appointment_date = models.DateTimeField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'donor_medical_reports'
        indexes = [
            models.Index(fields=['donor', 'appointment_date'], name='idx_report_donor_appt'),
            models.Index(fields=['doctor', 'is_approved'], name='idx_report_doctor_approved'),
        ]

    def __str__(self) -> str:
        return f"report {self.id} donor={self.donor_id} doctor={self.doctor_id}"
