from rest_framework import serializers

from doctor.models import DonorMedicalReport
from doctor.serializers.text import clean_text


class MedicalReportSerializer(serializers.Serializer):
    donorId = serializers.IntegerField(source='donor_id', min_value=1)
    doctorId = serializers.IntegerField(source='doctor_id', min_value=1)
    doctorNotes = serializers.CharField(
        source='doctor_notes', max_length=DonorMedicalReport.NOTES_MAX_LENGTH,
        required=False, allow_blank=True, allow_null=True,
    )
    healthStatus = serializers.CharField(
        source='health_status', max_length=DonorMedicalReport.HEALTH_STATUS_MAX_LENGTH,
        required=False, allow_blank=True, allow_null=True,
    )
    isApproved = serializers.BooleanField(source='is_approved', required=False, default=False)
    appointmentDate = serializers.DateTimeField(source='appointment_date', required=False, allow_null=True)

    def validate_doctorNotes(self, v):
        if v is None:
            return v
        return clean_text(v, DonorMedicalReport.NOTES_MAX_LENGTH)


class MedicalNotesSerializer(serializers.Serializer):
    notes = serializers.CharField(
        max_length=DonorMedicalReport.NOTES_MAX_LENGTH,
        error_messages={
            'required': 'Medical notes are required',
            'blank': 'Medical notes are required',
            'max_length': 'Medical notes must not exceed {max_length} characters',
        },
    )

    def validate_notes(self, v):
        v = clean_text(v.strip(), DonorMedicalReport.NOTES_MAX_LENGTH)
        if not v:
            raise serializers.ValidationError('Medical notes are required')
        return v


class AppointmentRangeQuerySerializer(serializers.Serializer):
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()

    def validate(self, attrs):
        if attrs['start'] > attrs['end']:
            raise serializers.ValidationError({'end': 'end must not be before start'})
        return attrs
