from rest_framework import serializers
from .models import GlucoseReading


class GlucoseReadingSerializer(serializers.ModelSerializer):
    """
    Read-only representation of a logged glucose reading.
    """

    user_id = serializers.CharField(source='profile.user_id', read_only=True)
    risk_level_display = serializers.CharField(source='get_risk_level_display', read_only=True)
    is_critical = serializers.BooleanField(read_only=True)

    class Meta:
        model = GlucoseReading
        fields = [
            'id', 'profile', 'user_id', 'value_mg_dl',
            'risk_level', 'risk_level_display', 'is_critical',
            'source', 'recorded_at', 'created_at',
        ]
        read_only_fields = fields
