"""
Inbound Message Routing
Provider-agnostic entry point: a channel adapter hands over (user_id, text)
and delivers whatever prompt_text comes back.
"""

import logging
from typing import Any, Dict, Optional

from django.core.cache import cache

from apps.onboarding.exceptions import StoreUnavailableError
from apps.onboarding.orchestrator import COMPLETED_STEP, OnboardingOrchestrator, OnboardingReply
from apps.onboarding.parsers import parse_language_change
from apps.onboarding.prompts import LANGUAGE_NAMES, PromptKey, get_prompt
from apps.readings.services import parse_glucose_reading, record_glucose_reading

logger = logging.getLogger(__name__)

# ── Duplicate deliveries ──────────────────────────────────────────────────────
_DEDUP_PREFIX = "msg_seen:"

# ── Commands (whole message, case-insensitive) ─────────────────────────────────
_RESET_CMDS  = {"reset", "restart", "start over"}
_HELP_CMDS   = {"help", "?", "menu"}
_STATUS_CMDS = {"status", "progress"}


def _already_seen(message_id: Optional[str], ttl: int) -> bool:
    """Marks message_id as seen; True if it already was within the window."""
    if not message_id:
        return False
    # cache.add only writes when the key is absent
    return not cache.add(f"{_DEDUP_PREFIX}{message_id}", True, ttl)


def _command(text: Optional[str]) -> str:
    return " ".join((text or "").lower().split())


def _registered_reply(user_id: str, text: Optional[str],
                      orchestrator: OnboardingOrchestrator) -> Optional[OnboardingReply]:
    """
    Glucose readings and language changes from patients who finished
    onboarding. None hands the message to the onboarding flow.
    """
    reading = parse_glucose_reading(text)
    language = parse_language_change(text, orchestrator.config.supported_languages)
    if reading is None and language is None:
        return None

    profile = None
    try:
        profile = orchestrator.profiles.find_by_user_id(user_id)
        if profile is None or not profile.completed:
            return None

        if reading is not None:
            prompt_text = record_glucose_reading(profile, reading)
        else:
            orchestrator.profiles.set_language(profile, language)
            prompt_text = get_prompt(
                PromptKey.LANGUAGE_CHANGED, language, language=LANGUAGE_NAMES[language]
            )
    except StoreUnavailableError:
        logger.error(f"Follow-up message from {user_id} could not be stored", exc_info=True)
        language = profile.preferred_language if profile is not None else orchestrator.config.default_language
        return OnboardingReply(get_prompt(PromptKey.STORE_UNAVAILABLE, language), completed=False, step=None)

    return OnboardingReply(prompt_text, completed=True, step=COMPLETED_STEP)


# ENTRY POINT
def route_incoming_message(user_id: str, text: Optional[str], message_id: Optional[str] = None,
                           orchestrator: Optional[OnboardingOrchestrator] = None) -> Dict[str, Any]:
    orchestrator = orchestrator or OnboardingOrchestrator.from_settings()

    if _already_seen(message_id, orchestrator.config.message_dedup_ttl):
        logger.info(f"Skipping duplicate delivery of message {message_id} from {user_id}")
        return {"duplicate": True, "prompt_text": "", "completed": False, "step": None}

    command = _command(text)
    if command in _RESET_CMDS:
        reply = orchestrator.reset(user_id)
    elif command in _HELP_CMDS:
        reply = orchestrator.help(user_id)
    elif command in _STATUS_CMDS:
        reply = orchestrator.progress(user_id)
    else:
        reply = _registered_reply(user_id, text, orchestrator) or orchestrator.handle(user_id, text)

    return {
        "duplicate": False,
        "prompt_text": reply.prompt_text,
        "completed": reply.completed,
        "step": reply.step,
    }
