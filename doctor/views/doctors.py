"""
Doctor directory views.

Doctors are seeded at deployment (see ``manage.py ensure_doctors``) but
can also be created, renamed and removed here. Removing a doctor also
removes every medical report they administer.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status

from doctor.serializers.doctor import DoctorSerializer
from doctor.services.doctors import (
    create_doctor,
    delete_doctor,
    format_doctor,
    get_doctor,
    list_doctors,
    update_doctor,
)


@api_view(['GET', 'POST'])
def doctors_list(request):
    if request.method == 'GET':
        return Response([format_doctor(d) for d in list_doctors()])
    # POST
    s = DoctorSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    doctor = create_doctor(**s.validated_data)
    return Response(format_doctor(doctor), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
def doctor_detail(request, doctor_id: int):
    if request.method == 'GET':
        return Response(format_doctor(get_doctor(doctor_id)))
    if request.method == 'PUT':
        s = DoctorSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return Response(format_doctor(update_doctor(doctor_id, **s.validated_data)))
    # DELETE
    delete_doctor(doctor_id)
    return Response(status=status.HTTP_204_NO_CONTENT)
