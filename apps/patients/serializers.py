from rest_framework import serializers
from .models import PatientProfile


class PatientProfileSerializer(serializers.ModelSerializer):
    """
    Read-only representation of an onboarded patient profile.
    """

    preferred_language_display = serializers.CharField(source='get_preferred_language_display', read_only=True)
    diabetes_type_display = serializers.CharField(source='get_diabetes_type_display', read_only=True)
    medication_type_display = serializers.CharField(source='get_medication_type_display', read_only=True)
    is_on_insulin = serializers.BooleanField(read_only=True)

    class Meta:
        model = PatientProfile
        fields = [
            'id', 'user_id', 'name', 'age', 'gender',
            'preferred_language', 'preferred_language_display',
            'emergency_contact', 'pincode', 'consent_given',
            'diabetes_type', 'diabetes_type_display', 'diabetes_duration_years',
            'medication_type', 'medication_type_display', 'is_on_insulin', 'medicines',
            'diet_preference', 'comorbidities', 'last_hba1c',
            'completed', 'onboarded_at', 'created_at', 'updated_at',
        ]
        read_only_fields = fields
