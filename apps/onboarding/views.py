"""
Onboarding API Views
Operator endpoints for inspecting and resetting a patient's onboarding.
"""

import logging
from dataclasses import asdict

from drf_spectacular.utils import extend_schema
from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.onboarding.exceptions import StoreUnavailableError
from apps.onboarding.orchestrator import OnboardingOrchestrator
from apps.onboarding.serializers import OnboardingReplySerializer, OnboardingStatusSerializer

logger = logging.getLogger(__name__)


class OnboardingStatusView(views.APIView):
    """
    GET /api/v1/onboarding/{user_id}/status/
    Current question, progress and language for one user
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: OnboardingStatusSerializer},
        description="Onboarding progress for a user"
    )
    def get(self, request, user_id):
        try:
            onboarding_status = OnboardingOrchestrator.from_settings().status(user_id)
        except StoreUnavailableError:
            logger.error(f"Status lookup failed for {user_id}", exc_info=True)
            return Response({
                'error': 'Onboarding store unavailable'
            }, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        if not onboarding_status.started:
            return Response({
                'error': 'Onboarding not started'
            }, status=status.HTTP_404_NOT_FOUND)

        return Response(OnboardingStatusSerializer(asdict(onboarding_status)).data)


class OnboardingResetView(views.APIView):
    """
    POST /api/v1/onboarding/{user_id}/reset/
    Discard partial answers; the next message restarts at the language menu
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=None,
        responses={200: OnboardingReplySerializer},
        description="Reset a user's in-progress onboarding"
    )
    def post(self, request, user_id):
        reply = OnboardingOrchestrator.from_settings().reset(user_id)
        return Response(OnboardingReplySerializer(asdict(reply)).data, status=status.HTTP_200_OK)
