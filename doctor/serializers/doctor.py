from rest_framework import serializers

from doctor.serializers.text import clean_text

NAME_MAX_LENGTH = 100


class DoctorSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=NAME_MAX_LENGTH,
        error_messages={'blank': 'Doctor name is required', 'required': 'Doctor name is required'},
    )
    specialization = serializers.CharField(
        max_length=50,
        error_messages={'blank': 'Specialization is required', 'required': 'Specialization is required'},
    )

    def validate_name(self, v):
        v = clean_text(v.strip(), NAME_MAX_LENGTH)
        if not v:
            raise serializers.ValidationError('Doctor name is required')
        return v
