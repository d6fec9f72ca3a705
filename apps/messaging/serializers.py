"""
Inbound messaging serializers
"""

from rest_framework import serializers


class InboundMessageSerializer(serializers.Serializer):
    """One inbound chat message from any channel adapter"""

    user_id = serializers.CharField(
        max_length=32,
        help_text="Sender identifier, normally the phone number (e.g. +919876543210)"
    )

    text = serializers.CharField(
        max_length=4096,
        allow_blank=True,
        trim_whitespace=False,
        help_text="Raw message text"
    )

    message_id = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        max_length=255,
        help_text="Provider message id; repeats within the dedup window are ignored"
    )


class InboundReplySerializer(serializers.Serializer):
    prompt_text = serializers.CharField(
        allow_blank=True,
        help_text="Text to send back to the user; empty for duplicates"
    )
    completed = serializers.BooleanField(help_text="True once onboarding is finished")
    step = serializers.CharField(allow_null=True, help_text="Step awaiting an answer, or 'completed'")
    duplicate = serializers.BooleanField(help_text="True when the message_id was already processed")
