"""
Messaging Tests
Command routing, registered-patient messages, duplicate deliveries and the inbound endpoint
"""

from unittest import mock

import pytest
from django.urls import reverse
from rest_framework import status

from apps.messaging.services import route_incoming_message
from apps.onboarding.config import OnboardingConfig
from apps.onboarding.exceptions import StoreUnavailableError
from apps.onboarding.models import OnboardingSession
from apps.onboarding.orchestrator import OnboardingOrchestrator
from apps.onboarding.prompts import PromptKey, get_prompt
from apps.patients.models import PatientProfile
from apps.patients.tests import make_profile
from apps.readings.models import GlucoseReading
from apps.readings.stores import ReadingStore

USER = "+919800000002"


@pytest.mark.django_db
class TestRouteIncomingMessage:

    def test_first_message_starts_onboarding(self, orchestrator):
        result = route_incoming_message(USER, "hello", orchestrator=orchestrator)

        assert result["duplicate"] is False
        assert result["completed"] is False
        assert result["step"] == "language"
        assert "1. English" in result["prompt_text"]

    def test_duplicate_message_id_is_dropped(self, orchestrator):
        route_incoming_message(USER, "hello", message_id="wamid.1", orchestrator=orchestrator)
        route_incoming_message(USER, "2", message_id="wamid.2", orchestrator=orchestrator)
        revision = OnboardingSession.objects.get(user_id=USER).revision

        result = route_incoming_message(USER, "2", message_id="wamid.2", orchestrator=orchestrator)

        assert result == {"duplicate": True, "prompt_text": "", "completed": False, "step": None}
        assert OnboardingSession.objects.get(user_id=USER).revision == revision

    def test_messages_without_id_are_not_deduplicated(self, orchestrator):
        first = route_incoming_message(USER, "hello", orchestrator=orchestrator)
        second = route_incoming_message(USER, "hello", orchestrator=orchestrator)
        assert first["duplicate"] is False
        assert second["duplicate"] is False

    @pytest.mark.parametrize("command", ["reset", "RESTART", "  start   over "])
    def test_reset_commands(self, orchestrator, command):
        route_incoming_message(USER, "hello", orchestrator=orchestrator)
        route_incoming_message(USER, "2", orchestrator=orchestrator)

        result = route_incoming_message(USER, command, orchestrator=orchestrator)

        assert result["step"] == "language"
        session = OnboardingSession.objects.get(user_id=USER)
        assert session.current_step == "language"
        assert session.fields == {}

    @pytest.mark.parametrize("command", ["help", "?", "Menu"])
    def test_help_commands(self, orchestrator, command):
        route_incoming_message(USER, "hello", orchestrator=orchestrator)
        route_incoming_message(USER, "3", orchestrator=orchestrator)

        result = route_incoming_message(USER, command, orchestrator=orchestrator)

        assert result["prompt_text"] == get_prompt(PromptKey.HELP, "kn")
        assert OnboardingSession.objects.get(user_id=USER).current_step == "name"

    @pytest.mark.parametrize("command", ["status", "progress"])
    def test_status_commands(self, orchestrator, command):
        route_incoming_message(USER, "hello", orchestrator=orchestrator)
        route_incoming_message(USER, "1", orchestrator=orchestrator)

        result = route_incoming_message(USER, command, orchestrator=orchestrator)

        assert result["prompt_text"].startswith("Registration progress: question 2 of 14.")
        assert result["step"] == "name"

    def test_command_words_inside_answers_are_answers(self, orchestrator):
        route_incoming_message(USER, "hello", orchestrator=orchestrator)
        route_incoming_message(USER, "1", orchestrator=orchestrator)

        result = route_incoming_message(USER, "Help Singh", orchestrator=orchestrator)

        assert result["step"] == "age"


@pytest.mark.django_db
class TestRegisteredPatientMessages:
    """Readings and language changes after onboarding"""

    def test_glucose_reading_is_logged(self, orchestrator):
        make_profile(USER)

        result = route_incoming_message(USER, "My sugar is 250", orchestrator=orchestrator)

        assert result["completed"] is True
        assert result["step"] == "completed"
        assert result["prompt_text"] == get_prompt(PromptKey.GLUCOSE_CRITICAL_HIGH, "en", value=250)
        reading = GlucoseReading.objects.get(profile__user_id=USER)
        assert reading.value_mg_dl == 250
        assert reading.risk_level == "critical_high"

    def test_language_change(self, orchestrator):
        make_profile(USER)

        result = route_incoming_message(USER, "switch to Hindi", orchestrator=orchestrator)

        assert result["prompt_text"] == get_prompt(PromptKey.LANGUAGE_CHANGED, "hi", language="हिन्दी")
        profile = PatientProfile.objects.get(user_id=USER)
        assert profile.preferred_language == "hi"
        assert profile.name == "Ramesh Kumar"

        follow_up = route_incoming_message(USER, "thanks", orchestrator=orchestrator)
        assert follow_up["prompt_text"] == get_prompt(PromptKey.ALREADY_REGISTERED, "hi", name="Ramesh Kumar")

    def test_unconfigured_language_is_not_a_change(self):
        config = OnboardingConfig.from_settings({"SUPPORTED_LANGUAGES": ["en", "hi"]})
        make_profile(USER)

        result = route_incoming_message(USER, "telugu", orchestrator=OnboardingOrchestrator(config=config))

        assert result["prompt_text"] == get_prompt(PromptKey.ALREADY_REGISTERED, "en", name="Ramesh Kumar")
        assert PatientProfile.objects.get(user_id=USER).preferred_language == "en"

    def test_language_and_sugar_words_during_onboarding_are_answers(self, orchestrator):
        route_incoming_message(USER, "hello", orchestrator=orchestrator)

        result = route_incoming_message(USER, "hindi", orchestrator=orchestrator)

        assert result["step"] == "name"
        assert not PatientProfile.objects.filter(user_id=USER).exists()

        route_incoming_message(USER, "sugar 120", orchestrator=orchestrator)
        assert not GlucoseReading.objects.exists()
        assert OnboardingSession.objects.get(user_id=USER).current_step == "name"

    def test_store_failure_while_logging(self, orchestrator):
        make_profile(USER, preferred_language="te")

        with mock.patch.object(ReadingStore, "add", side_effect=StoreUnavailableError("down")):
            result = route_incoming_message(USER, "sugar 140", orchestrator=orchestrator)

        assert result["prompt_text"] == get_prompt(PromptKey.STORE_UNAVAILABLE, "te")
        assert result["completed"] is False
        assert not GlucoseReading.objects.exists()


@pytest.mark.django_db
class TestInboundAPI:

    def test_inbound_message(self, api_client):
        url = reverse('messaging:inbound')
        response = api_client.post(url, {'user_id': USER, 'text': 'hi', 'message_id': 'm-1'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['step'] == 'language'
        assert response.data['completed'] is False
        assert response.data['duplicate'] is False
        assert OnboardingSession.objects.filter(user_id=USER).exists()

    def test_inbound_duplicate(self, api_client):
        url = reverse('messaging:inbound')
        payload = {'user_id': USER, 'text': 'hi', 'message_id': 'm-1'}
        api_client.post(url, payload, format='json')

        response = api_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['duplicate'] is True
        assert response.data['prompt_text'] == ''

    def test_inbound_blank_text_is_accepted(self, api_client):
        url = reverse('messaging:inbound')
        api_client.post(url, {'user_id': USER, 'text': 'hi'}, format='json')

        response = api_client.post(url, {'user_id': USER, 'text': ''}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['step'] == 'language'
        assert response.data['prompt_text'].startswith(get_prompt(PromptKey.INVALID_NOTICE, 'en'))

    def test_inbound_validation(self, api_client):
        response = api_client.post(reverse('messaging:inbound'), {'text': 'hi'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'user_id' in response.data

    def test_unexpected_error_still_returns_a_reply(self, api_client):
        with mock.patch('apps.messaging.views.route_incoming_message', side_effect=RuntimeError("boom")):
            response = api_client.post(
                reverse('messaging:inbound'), {'user_id': USER, 'text': 'hi'}, format='json'
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['prompt_text'] == get_prompt(PromptKey.STORE_UNAVAILABLE, 'en')
        assert 'boom' not in response.data['prompt_text']

    def test_health(self, api_client):
        response = api_client.get(reverse('messaging:health'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['database'] == 'healthy'
        assert response.data['ai_parser']['enabled'] is False
        assert response.data['languages'] == ['en', 'hi', 'kn', 'te']
