"""
Onboarding configuration, read once from settings.GLUCO_SAHAYAK and passed
to the orchestrator and messaging service.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from apps.onboarding.prompts import LANGUAGE_NAMES

# Steps where a "skip" answer may record None
SKIP_ALLOWED_STEPS = frozenset({"emergency_contact"})

DEFAULTS = {
    'DEFAULT_LANGUAGE': 'en',
    'SUPPORTED_LANGUAGES': ['en', 'hi', 'kn', 'te'],
    'SKIPPABLE_STEPS': [],
    'AI_PARSER_ENABLED': False,
    'AI_PARSER_MODEL': 'Qwen/Qwen2.5-7B-Instruct',
    'AI_PARSER_TIMEOUT': 8,
    'HF_TOKEN': '',
    'MESSAGE_DEDUP_TTL': 600,
}


@dataclass(frozen=True)
class OnboardingConfig:
    default_language: str = 'en'
    supported_languages: Tuple[str, ...] = ('en', 'hi', 'kn', 'te')
    skippable_steps: frozenset = field(default_factory=frozenset)
    ai_parser_enabled: bool = False
    ai_parser_model: str = 'Qwen/Qwen2.5-7B-Instruct'
    ai_parser_timeout: float = 8
    hf_token: str = ''
    message_dedup_ttl: int = 600

    def __post_init__(self):
        unknown = [code for code in self.supported_languages if code not in LANGUAGE_NAMES]
        if unknown:
            raise ImproperlyConfigured(f"Unsupported onboarding languages: {unknown}")
        if self.default_language not in LANGUAGE_NAMES:
            raise ImproperlyConfigured(f"Unsupported default language: {self.default_language!r}")
        not_skippable = set(self.skippable_steps) - SKIP_ALLOWED_STEPS
        if not_skippable:
            raise ImproperlyConfigured(
                f"SKIPPABLE_STEPS may only contain {sorted(SKIP_ALLOWED_STEPS)}, got {sorted(not_skippable)}"
            )

    @classmethod
    def from_settings(cls, overrides: Optional[Mapping] = None) -> "OnboardingConfig":
        values = {**DEFAULTS, **getattr(settings, 'GLUCO_SAHAYAK', {}), **(overrides or {})}
        return cls(
            default_language=values['DEFAULT_LANGUAGE'],
            supported_languages=tuple(values['SUPPORTED_LANGUAGES']),
            skippable_steps=frozenset(values['SKIPPABLE_STEPS']),
            ai_parser_enabled=bool(values['AI_PARSER_ENABLED']),
            ai_parser_model=values['AI_PARSER_MODEL'],
            ai_parser_timeout=values['AI_PARSER_TIMEOUT'],
            hf_token=values['HF_TOKEN'],
            message_dedup_ttl=int(values['MESSAGE_DEDUP_TTL']),
        )

    def is_skippable(self, step: str) -> bool:
        return step in self.skippable_steps
