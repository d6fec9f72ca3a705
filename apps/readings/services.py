"""
Glucose Reading Service
Recognises a glucose reading in a chat message, classifies it against the
risk bands and logs it for a registered patient.

Bands (mg/dL): below 70 critical low, 70-130 normal, 131-180 elevated,
above 180 critical high.
"""

import logging
import re
from datetime import timedelta
from typing import Optional

from django.utils import timezone

from apps.onboarding.prompts import PromptKey, get_prompt
from apps.patients.models import PatientProfile
from apps.readings.models import RiskLevel
from apps.readings.stores import ReadingStore

logger = logging.getLogger(__name__)

CRITICAL_LOW_BELOW = 70
NORMAL_MAX = 130
ELEVATED_MAX = 180

MIN_READING = 20
MAX_READING = 600

AVERAGE_WINDOW = timedelta(days=7)

GLUCOSE_KEYWORDS = (
    "sugar", "glucose", "mg/dl", "mgdl", "fasting", "reading",
    "शुगर", "शक्कर", "ग्लूकोज", "ಸಕ್ಕರೆ", "ಶುಗರ್", "చక్కెర", "షుగర్",
)

RISK_PROMPTS = {
    RiskLevel.CRITICAL_LOW: PromptKey.GLUCOSE_CRITICAL_LOW,
    RiskLevel.NORMAL: PromptKey.GLUCOSE_NORMAL,
    RiskLevel.ELEVATED: PromptKey.GLUCOSE_ELEVATED,
    RiskLevel.CRITICAL_HIGH: PromptKey.GLUCOSE_CRITICAL_HIGH,
}


def parse_glucose_reading(text) -> Optional[int]:
    """'My sugar is 120' -> 120. A reading needs a glucose keyword and a 2-3 digit value."""
    if not isinstance(text, str):
        return None
    t = " ".join(text.lower().split())
    if not any(keyword in t for keyword in GLUCOSE_KEYWORDS):
        return None
    match = re.search(r"(?<![0-9.])(\d{2,3})(?![0-9])", t)
    if not match:
        return None
    value = int(match.group(1))
    return value if MIN_READING <= value <= MAX_READING else None


def classify_glucose(value: int) -> str:
    if value < CRITICAL_LOW_BELOW:
        return RiskLevel.CRITICAL_LOW.value
    if value <= NORMAL_MAX:
        return RiskLevel.NORMAL.value
    if value <= ELEVATED_MAX:
        return RiskLevel.ELEVATED.value
    return RiskLevel.CRITICAL_HIGH.value


def record_glucose_reading(profile: PatientProfile, value: int,
                           store: Optional[ReadingStore] = None) -> str:
    """Log the reading and return the localised advice text."""
    store = store or ReadingStore()
    risk_level = classify_glucose(value)
    reading = store.add(profile, value, risk_level)

    if reading.is_critical:
        logger.warning(f"Critical glucose reading for {profile.user_id}: {value} mg/dL ({risk_level})")
    else:
        logger.info(f"Glucose reading logged for {profile.user_id}: {risk_level}")

    average = store.average_since(profile, timezone.now() - AVERAGE_WINDOW)
    return get_prompt(
        RISK_PROMPTS[RiskLevel(risk_level)], profile.preferred_language,
        value=value, average=average if average is not None else "--",
    )
