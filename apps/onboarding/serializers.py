"""
Onboarding API serializers
"""

from rest_framework import serializers


class OnboardingReplySerializer(serializers.Serializer):
    prompt_text = serializers.CharField(help_text="Message to deliver to the patient")
    completed = serializers.BooleanField(help_text="True once the patient profile is committed")
    step = serializers.CharField(
        allow_null=True,
        help_text="Step now awaiting an answer, or 'completed'"
    )


class OnboardingStatusSerializer(serializers.Serializer):
    user_id = serializers.CharField()
    started = serializers.BooleanField()
    completed = serializers.BooleanField()
    step = serializers.CharField(allow_null=True)
    step_number = serializers.IntegerField(help_text="1-based question number, 0 when not started")
    total_steps = serializers.IntegerField()
    language = serializers.CharField()
