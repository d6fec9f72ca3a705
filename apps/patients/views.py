from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter
from .models import PatientProfile
from .serializers import PatientProfileSerializer


class PatientProfileViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only access to patient profiles written by onboarding.

    API Endpoints:
    - GET /api/v1/patients/profiles/ - List profiles
    - GET /api/v1/patients/profiles/{id}/ - Retrieve one profile

    Profiles are only ever written by the onboarding flow, so there is no
    create/update/delete here.
    """

    queryset = PatientProfile.objects.all()
    serializer_class = PatientProfileSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['preferred_language', 'diabetes_type', 'medication_type', 'completed']
    search_fields = ['name', 'user_id']
    ordering_fields = ['name', 'age', 'onboarded_at', 'created_at']
    ordering = ['-created_at']
