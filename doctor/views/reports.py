"""
Medical report views.

These endpoints let senior doctors approve or reject donations, append
notes to a donor's medical report and look reports up by donor, doctor,
approval state or health status. Views only parse input and render
output; every state change goes through :class:`DoctorService`.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status

from doctor.serializers.report import (
    AppointmentRangeQuerySerializer,
    MedicalNotesSerializer,
    MedicalReportSerializer,
)
from doctor.services.reports import DoctorService, format_report, format_statistics

service = DoctorService()

# Fields a full PUT resets when they are left out of the body.
_REPLACEABLE_DEFAULTS = {
    'doctor_notes': None,
    'health_status': None,
    'appointment_date': None,
}


def _many(reports) -> Response:
    return Response([format_report(r) for r in reports])


@api_view(['PUT'])
def approve_donation(request, report_id: int):
    return Response(format_report(service.approve_donation(report_id)))


@api_view(['PUT'])
def reject_donation(request, report_id: int):
    return Response(format_report(service.reject_donation(report_id)))


@api_view(['PUT'])
def add_medical_notes(request, report_id: int):
    s = MedicalNotesSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    report = service.add_medical_notes(report_id, s.validated_data['notes'])
    return Response(format_report(report))


@api_view(['GET'])
def donor_report(request, donor_id: int):
    return Response(format_report(service.get_medical_report(donor_id)))


@api_view(['GET'])
def donor_latest_report(request, donor_id: int):
    return Response(format_report(service.get_latest_medical_report(donor_id)))


@api_view(['GET'])
def donor_report_exists(request, donor_id: int):
    return Response(service.has_medical_report(donor_id))


@api_view(['GET'])
def doctor_reports(request, doctor_id: int):
    return _many(service.get_medical_reports_by_doctor(doctor_id))


@api_view(['GET'])
def approved_reports(request):
    return _many(service.get_approved_medical_reports())


@api_view(['GET'])
def unapproved_reports(request):
    return _many(service.get_unapproved_medical_reports())


@api_view(['GET'])
def reports_by_status(request, health_status: str):
    return _many(service.get_medical_reports_by_health_status(health_status))


@api_view(['GET'])
def reports_by_appointment(request):
    """List reports whose appointment falls within ``start``..``end`` (inclusive).

    Query params:
      - start: ISO-8601 datetime
      - end: ISO-8601 datetime
    """
    q = AppointmentRangeQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return _many(service.get_medical_reports_by_appointment_range(q.validated_data['start'], q.validated_data['end']))


@api_view(['POST'])
def create_report(request):
    s = MedicalReportSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    report = service.create_medical_report(**s.validated_data)
    return Response(format_report(report), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
def report_detail(request, report_id: int):
    if request.method == 'GET':
        return Response(format_report(service.get_medical_report_by_id(report_id)))
    if request.method == 'PUT':
        service.get_medical_report_by_id(report_id)
        s = MedicalReportSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        report = service.update_medical_report(report_id, **{**_REPLACEABLE_DEFAULTS, **s.validated_data})
        return Response(format_report(report))
    # DELETE
    service.delete_medical_report(report_id)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
def doctor_statistics(request, doctor_id: int):
    return Response(format_statistics(service.get_doctor_statistics(doctor_id)))
