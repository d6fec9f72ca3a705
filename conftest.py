"""
Shared pytest fixtures
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.onboarding.config import OnboardingConfig
from apps.onboarding.orchestrator import OnboardingOrchestrator


@pytest.fixture(autouse=True)
def clear_cache():
    """The message dedup cache would otherwise leak between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def staff_client(django_user_model):
    user = django_user_model.objects.create_user(username='operator', password='secret')
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def onboarding_config():
    return OnboardingConfig.from_settings()


@pytest.fixture
def orchestrator(onboarding_config):
    return OnboardingOrchestrator(config=onboarding_config)
