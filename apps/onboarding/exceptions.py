"""
Onboarding error taxonomy.

A parser rejecting input is not an error: parsers return None and the
orchestrator re-prompts. Everything here is an exceptional path.
"""


class OnboardingError(Exception):
    """Base class for onboarding failures."""


class StoreUnavailableError(OnboardingError):
    """Session or profile store could not be reached (or timed out)."""


class UnknownStepError(OnboardingError):
    """A stored step name has no entry in the transition table."""

    def __init__(self, step):
        self.step = step
        super().__init__(f"Unknown onboarding step: {step!r}")


class AIParserError(OnboardingError):
    """The optional AI field normaliser failed; callers fall back to regex parsing."""
