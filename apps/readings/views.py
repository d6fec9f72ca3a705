from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter
from .models import GlucoseReading
from .serializers import GlucoseReadingSerializer


class GlucoseReadingViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only access to glucose readings logged over chat.

    API Endpoints:
    - GET /api/v1/readings/glucose/ - List readings (filter by profile or risk level)
    - GET /api/v1/readings/glucose/{id}/ - Retrieve one reading
    """

    queryset = GlucoseReading.objects.select_related('profile')
    serializer_class = GlucoseReadingSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['profile', 'risk_level', 'source']
    search_fields = ['profile__user_id', 'profile__name']
    ordering_fields = ['recorded_at', 'value_mg_dl']
    ordering = ['-recorded_at']
