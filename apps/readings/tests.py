"""
Glucose Reading Tests
Reading recognition, risk bands, logging and the read-only API
"""

from datetime import timedelta
from unittest import mock

import pytest
from django.db import OperationalError
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.onboarding.exceptions import StoreUnavailableError
from apps.onboarding.prompts import PromptKey, get_prompt
from apps.patients.tests import make_profile
from apps.readings.models import GlucoseReading, RiskLevel
from apps.readings.services import classify_glucose, parse_glucose_reading, record_glucose_reading
from apps.readings.stores import ReadingStore

USER = "+919800000030"


class TestParseGlucoseReading:

    @pytest.mark.parametrize("text,expected", [
        ("My sugar is 120", 120), ("glucose 95 mg/dl", 95), ("Fasting 110", 110),
        ("शुगर 250", 250), ("ಸಕ್ಕರೆ 180", 180), ("చక్కెర 65", 65),
        ("120", None), ("sugar", None), ("sugar 7", None), ("sugar 1200", None),
        ("sugar 999", None), (None, None),
    ])
    def test_parse(self, text, expected):
        assert parse_glucose_reading(text) == expected


class TestClassifyGlucose:

    @pytest.mark.parametrize("value,expected", [
        (45, RiskLevel.CRITICAL_LOW), (69, RiskLevel.CRITICAL_LOW),
        (70, RiskLevel.NORMAL), (130, RiskLevel.NORMAL),
        (131, RiskLevel.ELEVATED), (180, RiskLevel.ELEVATED),
        (181, RiskLevel.CRITICAL_HIGH), (400, RiskLevel.CRITICAL_HIGH),
    ])
    def test_bands(self, value, expected):
        assert classify_glucose(value) == expected.value


@pytest.mark.django_db
class TestRecordGlucoseReading:

    def test_reading_is_logged_with_average(self):
        profile = make_profile(USER)
        GlucoseReading.objects.create(profile=profile, value_mg_dl=100, risk_level=RiskLevel.NORMAL)

        text = record_glucose_reading(profile, 120)

        reading = GlucoseReading.objects.get(profile=profile, value_mg_dl=120)
        assert reading.risk_level == RiskLevel.NORMAL
        assert text == get_prompt(PromptKey.GLUCOSE_NORMAL, "en", value=120, average=110)

    def test_old_readings_leave_the_average(self):
        profile = make_profile(USER)
        GlucoseReading.objects.create(
            profile=profile, value_mg_dl=300, risk_level=RiskLevel.CRITICAL_HIGH,
            recorded_at=timezone.now() - timedelta(days=8),
        )

        text = record_glucose_reading(profile, 150)

        assert "7-day average: 150 mg/dL" in text

    def test_reply_in_profile_language(self):
        profile = make_profile(USER, preferred_language="hi")

        text = record_glucose_reading(profile, 55)

        assert text == get_prompt(PromptKey.GLUCOSE_CRITICAL_LOW, "hi", value=55)

    def test_critical_reading_logs_warning(self):
        profile = make_profile(USER)
        with mock.patch("apps.readings.services.logger") as logger:
            record_glucose_reading(profile, 320)
        assert "Critical glucose reading" in logger.warning.call_args[0][0]
        assert GlucoseReading.objects.get(profile=profile).is_critical

    def test_database_failure(self):
        profile = make_profile(USER)
        with mock.patch.object(GlucoseReading.objects, "create", side_effect=OperationalError("down")):
            with pytest.raises(StoreUnavailableError):
                ReadingStore().add(profile, 120, RiskLevel.NORMAL)


@pytest.mark.django_db
class TestGlucoseReadingAPI:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('readings:glucose-list'))
        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_list_and_filter_by_risk(self, staff_client):
        profile = make_profile(USER)
        record_glucose_reading(profile, 120)
        record_glucose_reading(profile, 250)

        response = staff_client.get(reverse('readings:glucose-list'), {'risk_level': 'critical_high'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['value_mg_dl'] == 250
        assert result['user_id'] == USER
        assert result['is_critical'] is True

    def test_read_only(self, staff_client):
        response = staff_client.post(reverse('readings:glucose-list'), {'value_mg_dl': 100}, format='json')
        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
