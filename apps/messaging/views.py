"""
Messaging API Views
HTTP surface for channel adapters (WhatsApp, SMS or a test console).
"""

import logging

from django.db import connection
from django.db.utils import OperationalError
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import status, views
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.messaging.serializers import InboundMessageSerializer, InboundReplySerializer
from apps.messaging.services import route_incoming_message
from apps.onboarding.config import OnboardingConfig
from apps.onboarding.prompts import PromptKey, get_prompt

logger = logging.getLogger(__name__)


class InboundMessageView(views.APIView):
    """
    POST /api/v1/messaging/inbound/

    Hand one inbound message to onboarding and get the reply to deliver.
    Always answers 200 with something sendable once the payload is valid.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        request=InboundMessageSerializer,
        responses={200: InboundReplySerializer},
        description="Process one inbound chat message and return the reply text"
    )
    def post(self, request):
        serializer = InboundMessageSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        user_id = data['user_id'].strip()
        logger.info(f"Inbound message from {user_id} ({len(data['text'])} chars)")

        try:
            result = route_incoming_message(user_id, data['text'], data.get('message_id') or None)
        except Exception as exc:
            logger.error(f"Inbound message from {user_id} failed: {exc}", exc_info=True)
            result = {
                "duplicate": False,
                "prompt_text": get_prompt(PromptKey.STORE_UNAVAILABLE, "en"),
                "completed": False,
                "step": None,
            }

        return Response(InboundReplySerializer(result).data, status=status.HTTP_200_OK)


class MessagingHealthCheckView(views.APIView):
    """
    GET /api/v1/messaging/health/

    Database reachability and AI normaliser configuration
    """

    permission_classes = [AllowAny]

    def get(self, request):
        db_status = "healthy"
        try:
            connection.ensure_connection()
        except OperationalError:
            db_status = "unhealthy"

        config = OnboardingConfig.from_settings()

        return Response({
            'status': 'healthy' if db_status == 'healthy' else 'unhealthy',
            'timestamp': timezone.now(),
            'database': db_status,
            'ai_parser': {
                'enabled': config.ai_parser_enabled,
                'model': config.ai_parser_model if config.ai_parser_enabled else None,
            },
            'languages': list(config.supported_languages),
        }, status=status.HTTP_200_OK if db_status == 'healthy' else status.HTTP_503_SERVICE_UNAVAILABLE)
