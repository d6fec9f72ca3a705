"""
End-to-end onboarding conversation through the inbound messaging endpoint
"""

import pytest
from django.urls import reverse

from apps.onboarding.models import OnboardingSession
from apps.onboarding.prompts import PromptKey, get_prompt
from apps.patients.models import PatientProfile

USER = "+15551234567"


@pytest.mark.django_db
def test_hindi_conversation_creates_profile(api_client):
    url = reverse('messaging:inbound')
    turns = iter(range(1, 100))

    def send(text):
        response = api_client.post(
            url, {'user_id': USER, 'text': text, 'message_id': f'msg-{next(turns)}'}, format='json'
        )
        assert response.status_code == 200
        return response.data

    def current_step():
        return OnboardingSession.objects.get(user_id=USER).current_step

    reply = send("hi")
    assert reply['step'] == 'language'
    assert current_step() == 'language'

    reply = send("2")
    assert reply['prompt_text'] == get_prompt(PromptKey.NAME, 'hi')
    assert current_step() == 'name'

    reply = send("")
    assert reply['prompt_text'].startswith(get_prompt(PromptKey.INVALID_NOTICE, 'hi'))
    assert reply['prompt_text'].endswith(get_prompt(PromptKey.NAME, 'hi'))
    assert current_step() == 'name'

    send("Ramesh Kumar")
    assert current_step() == 'age'

    reply = send("200")
    assert reply['step'] == 'age'
    assert current_step() == 'age'

    for text, expected_step in [
        ("55", "gender"),
        ("2", "emergency_contact"),
        ("98765 43210", "pincode"),
        ("560001", "consent"),
        ("हाँ", "diabetes_type"),
        ("2", "duration"),
        ("5 साल", "medication_type"),
        ("2", "medicine_names"),
        ("Lantus", "diet"),
        ("शाकाहारी", "comorbidities"),
        ("थायराइड", "hba1c"),
    ]:
        reply = send(text)
        assert reply['step'] == expected_step, text
        assert current_step() == expected_step

    reply = send("पता नहीं")
    assert reply['completed'] is True
    assert "Ramesh Kumar" in reply['prompt_text']

    assert not OnboardingSession.objects.filter(user_id=USER).exists()
    profile = PatientProfile.objects.get(user_id=USER)
    assert profile.completed is True
    assert profile.preferred_language == 'hi'
    assert profile.gender == 'female'
    assert profile.emergency_contact == '+919876543210'
    assert profile.consent_given is True
    assert profile.diabetes_duration_years == 5.0
    assert profile.medication_type == 'insulin'
    assert profile.medicines == ['Insulin Glargine']
    assert profile.diet_preference == 'vegetarian'
    assert profile.comorbidities == ['Thyroid']
    assert profile.last_hba1c is None

    # A provider redelivering the final answer under a new id is still harmless
    reply = send("पता नहीं")
    assert reply['completed'] is True
    assert PatientProfile.objects.filter(user_id=USER).count() == 1
