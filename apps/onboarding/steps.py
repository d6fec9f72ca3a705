"""
Onboarding Step Definitions
The step enum and the transition table. Pure lookups, no database access.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from apps.onboarding import parsers
from apps.onboarding.exceptions import UnknownStepError
from apps.onboarding.prompts import PromptKey
from apps.patients.choices import MedicationType, NONE_ENTRY


class OnboardingStep(Enum):
    """All onboarding questions, in the order they are asked."""
    LANGUAGE = "language"
    NAME = "name"
    AGE = "age"
    GENDER = "gender"
    EMERGENCY_CONTACT = "emergency_contact"
    PINCODE = "pincode"
    CONSENT = "consent"
    DIABETES_TYPE = "diabetes_type"
    DURATION = "duration"
    MEDICATION_TYPE = "medication_type"
    MEDICINE_NAMES = "medicine_names"
    DIET = "diet"
    COMORBIDITIES = "comorbidities"
    HBA1C = "hba1c"


INITIAL_STEP = OnboardingStep.LANGUAGE

STEP_ORDER = list(OnboardingStep)
TOTAL_STEPS = len(STEP_ORDER)

NextStep = Union[OnboardingStep, None, Callable[[Any], OnboardingStep]]


@dataclass(frozen=True)
class StepDefinition:
    step: OnboardingStep
    field: str
    parser: Callable[[str], Any]
    prompt_key: PromptKey
    next_step: NextStep


def _after_medication_type(value) -> OnboardingStep:
    if value == MedicationType.NONE:
        return OnboardingStep.DIET
    return OnboardingStep.MEDICINE_NAMES


_S = OnboardingStep

STEP_DEFINITIONS: Dict[OnboardingStep, StepDefinition] = {
    d.step: d for d in (
        StepDefinition(_S.LANGUAGE, "preferred_language", parsers.parse_language, PromptKey.LANGUAGE, _S.NAME),
        StepDefinition(_S.NAME, "name", parsers.parse_name, PromptKey.NAME, _S.AGE),
        StepDefinition(_S.AGE, "age", parsers.parse_age, PromptKey.AGE, _S.GENDER),
        StepDefinition(_S.GENDER, "gender", parsers.parse_gender, PromptKey.GENDER, _S.EMERGENCY_CONTACT),
        StepDefinition(_S.EMERGENCY_CONTACT, "emergency_contact", parsers.parse_phone, PromptKey.EMERGENCY_CONTACT, _S.PINCODE),
        StepDefinition(_S.PINCODE, "pincode", parsers.parse_pincode, PromptKey.PINCODE, _S.CONSENT),
        StepDefinition(_S.CONSENT, "consent_given", parsers.parse_consent, PromptKey.CONSENT, _S.DIABETES_TYPE),
        StepDefinition(_S.DIABETES_TYPE, "diabetes_type", parsers.parse_diabetes_type, PromptKey.DIABETES_TYPE, _S.DURATION),
        StepDefinition(_S.DURATION, "diabetes_duration_years", parsers.parse_duration, PromptKey.DURATION, _S.MEDICATION_TYPE),
        StepDefinition(_S.MEDICATION_TYPE, "medication_type", parsers.parse_medication_type, PromptKey.MEDICATION_TYPE, _after_medication_type),
        StepDefinition(_S.MEDICINE_NAMES, "medicines", parsers.parse_medicines, PromptKey.MEDICINE_NAMES, _S.DIET),
        StepDefinition(_S.DIET, "diet_preference", parsers.parse_diet, PromptKey.DIET, _S.COMORBIDITIES),
        StepDefinition(_S.COMORBIDITIES, "comorbidities", parsers.parse_comorbidities, PromptKey.COMORBIDITIES, _S.HBA1C),
        StepDefinition(_S.HBA1C, "last_hba1c", parsers.parse_hba1c, PromptKey.HBA1C, None),
    )
}

# Value recorded for a step the flow jumps over
SKIPPED_STEP_DEFAULTS = {
    OnboardingStep.MEDICINE_NAMES: [NONE_ENTRY],
}


def get_step_definition(step) -> StepDefinition:
    """Accepts an OnboardingStep or its stored string value."""
    try:
        return STEP_DEFINITIONS[OnboardingStep(step)]
    except (ValueError, KeyError):
        raise UnknownStepError(step) from None


def resolve_next_step(step, value) -> Optional[OnboardingStep]:
    """Next step after `step` accepted `value`; None means onboarding is done."""
    next_step = get_step_definition(step).next_step
    if callable(next_step):
        return next_step(value)
    return next_step


def skipped_fields(step, next_step: Optional[OnboardingStep]) -> Dict[str, Any]:
    """Defaults for every step jumped over between `step` and `next_step`."""
    start = STEP_ORDER.index(get_step_definition(step).step) + 1
    end = STEP_ORDER.index(next_step) if next_step else len(STEP_ORDER)
    return {
        STEP_DEFINITIONS[skipped].field: SKIPPED_STEP_DEFAULTS[skipped]
        for skipped in STEP_ORDER[start:end]
        if skipped in SKIPPED_STEP_DEFAULTS
    }


def step_number(step) -> int:
    """1-based position of the step, for progress messages."""
    return STEP_ORDER.index(get_step_definition(step).step) + 1
