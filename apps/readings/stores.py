"""
Glucose Reading Store
"""

import logging
from datetime import datetime
from typing import Optional

from django.db import DatabaseError
from django.db.models import Avg

from apps.onboarding.exceptions import StoreUnavailableError
from apps.patients.models import PatientProfile
from apps.readings.models import GlucoseReading

logger = logging.getLogger(__name__)


class ReadingStore:
    """Appends readings and computes averages. DB failures become StoreUnavailableError."""

    def add(self, profile: PatientProfile, value: int, risk_level: str) -> GlucoseReading:
        try:
            return GlucoseReading.objects.create(
                profile=profile, value_mg_dl=value, risk_level=risk_level
            )
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Reading insert failed for {profile.user_id}") from exc

    def average_since(self, profile: PatientProfile, since: datetime) -> Optional[int]:
        try:
            average = (
                GlucoseReading.objects.filter(profile=profile, recorded_at__gte=since)
                .aggregate(average=Avg('value_mg_dl'))['average']
            )
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Reading average failed for {profile.user_id}") from exc
        return round(average) if average is not None else None
