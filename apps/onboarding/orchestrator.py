"""
Onboarding Orchestrator
Drives one patient through the onboarding questions, one inbound message at
a time, and commits the finished profile.

Every call returns an OnboardingReply; infrastructure problems become a
localised "try again" message rather than an exception.
"""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Optional, Tuple

from django.db import DatabaseError, transaction

from apps.onboarding.config import OnboardingConfig
from apps.onboarding.exceptions import AIParserError, StoreUnavailableError, UnknownStepError
from apps.onboarding.llm import HFFieldNormaliser
from apps.onboarding.models import OnboardingSession
from apps.onboarding.parsers import is_skip, parse_language
from apps.onboarding.prompts import PromptKey, get_prompt, welcome_prompt
from apps.onboarding.steps import (
    INITIAL_STEP, TOTAL_STEPS, OnboardingStep, StepDefinition,
    get_step_definition, resolve_next_step, skipped_fields, step_number,
)
from apps.onboarding.stores import SessionStore
from apps.patients.models import PatientProfile
from apps.patients.stores import ProfileStore

logger = logging.getLogger(__name__)

COMPLETED_STEP = "completed"


@dataclass(frozen=True)
class OnboardingReply:
    prompt_text: str
    completed: bool = False
    step: Optional[str] = None


@dataclass(frozen=True)
class OnboardingStatus:
    user_id: str
    started: bool
    completed: bool
    step: Optional[str]
    step_number: int
    total_steps: int
    language: str


class OnboardingOrchestrator:
    """Onboarding state machine over the session and profile stores."""

    def __init__(self, session_store: Optional[SessionStore] = None,
                 profile_store: Optional[ProfileStore] = None,
                 config: Optional[OnboardingConfig] = None,
                 normaliser: Optional[HFFieldNormaliser] = None):
        self.sessions = session_store or SessionStore()
        self.profiles = profile_store or ProfileStore()
        self.config = config or OnboardingConfig.from_settings()
        self.normaliser = normaliser

    @classmethod
    def from_settings(cls) -> "OnboardingOrchestrator":
        config = OnboardingConfig.from_settings()
        return cls(config=config, normaliser=HFFieldNormaliser.from_config(config))

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def handle(self, user_id: str, text: Optional[str]) -> OnboardingReply:
        text = text.strip() if isinstance(text, str) else ""
        session = None
        try:
            profile = self.profiles.find_by_user_id(user_id)
            if profile is not None and profile.completed:
                self._log(user_id, COMPLETED_STEP, "already_registered", text)
                return self._already_registered(profile)

            session = self.sessions.find_by_user_id(user_id)
            if session is None:
                return self._start(user_id)

            return self._answer(session, text)

        except StoreUnavailableError:
            logger.error(f"Onboarding store unavailable for {user_id}", exc_info=True)
            return self._store_unavailable(session)
        except UnknownStepError as exc:
            logger.error(f"Unknown onboarding step {exc.step!r} for {user_id}, restarting")
            return self._restart(user_id, session)

    def reset(self, user_id: str) -> OnboardingReply:
        """Throw away partial answers and ask the first question again."""
        try:
            profile = self.profiles.find_by_user_id(user_id)
            if profile is not None and profile.completed:
                return self._already_registered(profile)
            self.sessions.reset(user_id)
        except StoreUnavailableError:
            logger.error(f"Onboarding reset failed for {user_id}", exc_info=True)
            return self._store_unavailable(None)

        logger.info(f"Onboarding reset for {user_id}")
        return OnboardingReply(self._welcome(), completed=False, step=INITIAL_STEP.value)

    def status(self, user_id: str) -> OnboardingStatus:
        """Progress snapshot. Store failures propagate as StoreUnavailableError."""
        profile = self.profiles.find_by_user_id(user_id)
        if profile is not None and profile.completed:
            return OnboardingStatus(
                user_id=user_id, started=True, completed=True, step=COMPLETED_STEP,
                step_number=TOTAL_STEPS, total_steps=TOTAL_STEPS,
                language=profile.preferred_language,
            )

        session = self.sessions.find_by_user_id(user_id)
        if session is None:
            return OnboardingStatus(
                user_id=user_id, started=False, completed=False, step=None,
                step_number=0, total_steps=TOTAL_STEPS,
                language=self.config.default_language,
            )

        try:
            number = step_number(session.current_step)
        except UnknownStepError:
            number = 0
        return OnboardingStatus(
            user_id=user_id, started=True, completed=False, step=session.current_step,
            step_number=number, total_steps=TOTAL_STEPS, language=self._language(session),
        )

    def progress(self, user_id: str) -> OnboardingReply:
        """Localised progress line followed by the question still waiting for an answer."""
        try:
            status = self.status(user_id)
            if status.completed:
                return self._already_registered(self.profiles.find_by_user_id(user_id))
            session = self.sessions.find_by_user_id(user_id) if status.started else None
        except StoreUnavailableError:
            logger.error(f"Onboarding status failed for {user_id}", exc_info=True)
            return self._store_unavailable(None)

        line = get_prompt(
            PromptKey.STATUS, status.language,
            step=status.step_number, total=status.total_steps,
        )
        if session is None or not status.step_number:
            return OnboardingReply(line, completed=False, step=status.step)
        return OnboardingReply(
            f"{line}\n\n{self._session_prompt(session)}", completed=False, step=status.step
        )

    def help(self, user_id: str) -> OnboardingReply:
        try:
            status = self.status(user_id)
        except StoreUnavailableError:
            logger.error(f"Onboarding help lookup failed for {user_id}", exc_info=True)
            return self._store_unavailable(None)
        return OnboardingReply(
            get_prompt(PromptKey.HELP, status.language),
            completed=status.completed, step=status.step,
        )

    # ------------------------------------------------------------------
    # Turn handling
    # ------------------------------------------------------------------

    def _start(self, user_id: str) -> OnboardingReply:
        session, created = self.sessions.create(user_id)
        self._log(user_id, session.current_step, "started" if created else "start_raced", "")
        if not created:
            return OnboardingReply(self._session_prompt(session), completed=False, step=session.current_step)
        return OnboardingReply(self._welcome(), completed=False, step=INITIAL_STEP.value)

    def _answer(self, session: OnboardingSession, text: str) -> OnboardingReply:
        definition = get_step_definition(session.current_step)
        accepted, value = self._parse(definition, text)

        if not accepted:
            self.sessions.touch(session)
            self._log(session.user_id, session.current_step, "rejected", text)
            language = self._language(session)
            return OnboardingReply(
                f"{get_prompt(PromptKey.INVALID_NOTICE, language)}\n\n{self._session_prompt(session)}",
                completed=False,
                step=session.current_step,
            )

        fields = {**session.fields, definition.field: value}
        next_step = resolve_next_step(definition.step, value)
        fields.update(skipped_fields(definition.step, next_step))

        if next_step is None:
            return self._complete(session, fields)

        if not self.sessions.update(session, next_step, fields):
            self._log(session.user_id, session.current_step, "lost_race", text)
            return self._reload(session.user_id)

        self._log(session.user_id, definition.step.value, f"advanced to {next_step.value}", text)
        return OnboardingReply(self._session_prompt(session), completed=False, step=next_step.value)

    def _complete(self, session: OnboardingSession, fields: dict) -> OnboardingReply:
        """Write the profile and drop the session in one transaction."""
        user_id = session.user_id
        try:
            with transaction.atomic():
                locked = self.sessions.lock_for_commit(session)
                if locked is not None:
                    profile = self.profiles.upsert(user_id, fields, completed=True)
                    self.sessions.delete(user_id)
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Onboarding commit failed for {user_id}") from exc

        if locked is None:
            self._log(user_id, session.current_step, "commit_raced", "")
            return self._reload(user_id)

        self._log(user_id, session.current_step, "completed", "")
        return self._completed(profile)

    def _reload(self, user_id: str) -> OnboardingReply:
        """A concurrent delivery moved this user on; answer from whatever state it left."""
        profile = self.profiles.find_by_user_id(user_id)
        if profile is not None and profile.completed:
            return self._completed(profile)

        current = self.sessions.find_by_user_id(user_id)
        if current is None:
            return self._start(user_id)
        return OnboardingReply(self._session_prompt(current), completed=False, step=current.current_step)

    def _restart(self, user_id: str, session: Optional[OnboardingSession]) -> OnboardingReply:
        language = self._language(session)
        try:
            self.sessions.reset(user_id)
        except StoreUnavailableError:
            logger.error(f"Onboarding restart failed for {user_id}", exc_info=True)
            return self._store_unavailable(session)
        return OnboardingReply(
            f"{get_prompt(PromptKey.RESTART, language)}\n\n{self._welcome()}",
            completed=False,
            step=INITIAL_STEP.value,
        )

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def _parse(self, definition: StepDefinition, text: str) -> Tuple[bool, Any]:
        """(accepted, value). A skipped step is accepted with value None."""
        if self.config.is_skippable(definition.step.value) and is_skip(text):
            return True, None

        parser = self._parser_for(definition)
        value = parser(text)
        if value is None and text and self.normaliser is not None:
            candidate = self._normalise(definition.step, text)
            if candidate:
                value = parser(candidate)
        return value is not None, value

    def _parser_for(self, definition: StepDefinition):
        if definition.step is OnboardingStep.LANGUAGE:
            return partial(parse_language, languages=self.config.supported_languages)
        return definition.parser

    def _normalise(self, step: OnboardingStep, text: str) -> Optional[str]:
        try:
            return self.normaliser.normalise(step.value, text)
        except AIParserError as exc:
            logger.warning(f"AI normaliser unavailable at step {step.value}, using regex result only: {exc}")
            return None

    # ------------------------------------------------------------------
    # Replies
    # ------------------------------------------------------------------

    def _language(self, session: Optional[OnboardingSession]) -> str:
        if session is not None and session.language:
            return session.language
        return self.config.default_language

    def _welcome(self) -> str:
        return welcome_prompt(self.config.supported_languages)

    def _session_prompt(self, session: OnboardingSession) -> str:
        definition = get_step_definition(session.current_step)
        if definition.step is OnboardingStep.LANGUAGE:
            return self._welcome()
        return get_prompt(definition.prompt_key, self._language(session))

    def _completed(self, profile: PatientProfile) -> OnboardingReply:
        return OnboardingReply(
            get_prompt(PromptKey.COMPLETED, profile.preferred_language, name=profile.name),
            completed=True,
            step=COMPLETED_STEP,
        )

    def _already_registered(self, profile: PatientProfile) -> OnboardingReply:
        return OnboardingReply(
            get_prompt(PromptKey.ALREADY_REGISTERED, profile.preferred_language, name=profile.name),
            completed=True,
            step=COMPLETED_STEP,
        )

    def _store_unavailable(self, session: Optional[OnboardingSession]) -> OnboardingReply:
        return OnboardingReply(
            get_prompt(PromptKey.STORE_UNAVAILABLE, self._language(session)),
            completed=False,
            step=session.current_step if session is not None else None,
        )

    @staticmethod
    def _log(user_id: str, step: str, outcome: str, text: str) -> None:
        logger.info(f"Onboarding | user={user_id} step={step} outcome={outcome} chars={len(text)}")
