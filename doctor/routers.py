"""
URL mappings for the doctor API.

Mounted under ``/api/doctor/`` by the project URLconf. Trailing slashes
are deliberately omitted to match the donor portal front-end.
"""
from django.urls import path

from .views import doctors, reports


urlpatterns = [
    # Reports: fixed segments first so they never shadow each other
    path('reports', reports.create_report, name='report-create'),
    path('reports/approved', reports.approved_reports, name='reports-approved'),
    path('reports/unapproved', reports.unapproved_reports, name='reports-unapproved'),
    path('reports/appointments', reports.reports_by_appointment, name='reports-appointments'),
    path('reports/status/<str:health_status>', reports.reports_by_status, name='reports-by-status'),
    path('reports/doctor/<int:doctor_id>', reports.doctor_reports, name='reports-by-doctor'),
    # Donor lookups
    path('reports/donor/<int:donor_id>', reports.donor_report, name='donor-report'),
    path('reports/donor/<int:donor_id>/latest', reports.donor_latest_report, name='donor-report-latest'),
    path('reports/donor/<int:donor_id>/exists', reports.donor_report_exists, name='donor-report-exists'),
    # Single report
    path('reports/<int:report_id>', reports.report_detail, name='report-detail'),
    path('reports/<int:report_id>/approve', reports.approve_donation, name='report-approve'),
    path('reports/<int:report_id>/reject', reports.reject_donation, name='report-reject'),
    path('reports/<int:report_id>/add-notes', reports.add_medical_notes, name='report-add-notes'),
    # Statistics
    path('statistics/<int:doctor_id>', reports.doctor_statistics, name='doctor-statistics'),
    # Doctor directory
    path('doctors', doctors.doctors_list, name='doctors'),
    path('doctors/<int:doctor_id>', doctors.doctor_detail, name='doctor-detail'),
]
