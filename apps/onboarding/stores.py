"""
Onboarding Session Store
Database-backed replacement for a cache session: onboarding spans days of
WhatsApp turns, so partial answers live in OnboardingSession rows.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.onboarding.exceptions import StoreUnavailableError
from apps.onboarding.models import OnboardingSession
from apps.onboarding.steps import INITIAL_STEP, OnboardingStep

logger = logging.getLogger(__name__)


class SessionStore:
    """All session reads and writes. Every database failure becomes StoreUnavailableError."""

    def find_by_user_id(self, user_id: str) -> Optional[OnboardingSession]:
        try:
            return OnboardingSession.objects.filter(user_id=user_id).first()
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Session lookup failed for {user_id}") from exc

    def create(self, user_id: str) -> Tuple[OnboardingSession, bool]:
        """
        Start a session at the first step.

        Returns (session, created). A concurrent delivery that created the row
        first hits the unique constraint; its row is returned with created=False.
        """
        try:
            with transaction.atomic():
                session = OnboardingSession.objects.create(
                    user_id=user_id, current_step=INITIAL_STEP.value
                )
            return session, True
        except IntegrityError:
            logger.info(f"Session for {user_id} already created by a concurrent delivery")
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Session create failed for {user_id}") from exc

        existing = self.find_by_user_id(user_id)
        if existing is None:
            raise StoreUnavailableError(f"Session for {user_id} vanished after create conflict")
        return existing, False

    def update(self, session: OnboardingSession, next_step: OnboardingStep,
               fields: Dict[str, Any]) -> bool:
        """
        Compare-and-swap advance. Only applies when the row is still at the
        step and revision this session was read with; False means another
        delivery advanced it first.
        """
        now = timezone.now()
        try:
            updated = OnboardingSession.objects.filter(
                pk=session.pk,
                current_step=session.current_step,
                revision=session.revision,
            ).update(
                current_step=next_step.value,
                fields=fields,
                revision=F('revision') + 1,
                last_updated_at=now,
            )
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Session update failed for {session.user_id}") from exc

        if updated:
            session.current_step = next_step.value
            session.fields = fields
            session.revision += 1
            session.last_updated_at = now
        return bool(updated)

    def touch(self, session: OnboardingSession) -> None:
        now = timezone.now()
        try:
            OnboardingSession.objects.filter(pk=session.pk).update(last_updated_at=now)
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Session touch failed for {session.user_id}") from exc
        session.last_updated_at = now

    def reset(self, user_id: str) -> OnboardingSession:
        """Replace any session with a fresh one at the first step.

        The new row has a new pk, so deliveries still holding the old row
        lose their compare-and-swap.
        """
        try:
            with transaction.atomic():
                OnboardingSession.objects.filter(user_id=user_id).delete()
                return OnboardingSession.objects.create(
                    user_id=user_id, current_step=INITIAL_STEP.value
                )
        except IntegrityError:
            logger.info(f"Session for {user_id} recreated by a concurrent delivery")
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Session reset failed for {user_id}") from exc

        existing = self.find_by_user_id(user_id)
        if existing is None:
            raise StoreUnavailableError(f"Session for {user_id} vanished after reset conflict")
        return existing

    def lock_for_commit(self, session: OnboardingSession) -> Optional[OnboardingSession]:
        """
        Lock the row for the terminal commit. Must run inside transaction.atomic().
        None means a concurrent delivery already committed or advanced it.
        """
        try:
            return (
                OnboardingSession.objects.select_for_update()
                .filter(pk=session.pk, current_step=session.current_step, revision=session.revision)
                .first()
            )
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Session lock failed for {session.user_id}") from exc

    def delete(self, user_id: str) -> bool:
        try:
            deleted, _ = OnboardingSession.objects.filter(user_id=user_id).delete()
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Session delete failed for {user_id}") from exc
        return bool(deleted)

