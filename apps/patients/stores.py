"""
Patient Profile Store
Keyed by user_id. The onboarding orchestrator reads profiles to detect
completed users and upserts the finalized field set on the terminal step.
"""

import logging
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.onboarding.exceptions import StoreUnavailableError
from apps.patients.choices import UNKNOWN_HBA1C
from apps.patients.models import PatientProfile

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "preferred_language", "name", "age", "gender", "emergency_contact",
    "pincode", "consent_given", "diabetes_type", "diabetes_duration_years",
    "medication_type", "medicines", "diet_preference", "comorbidities",
    "last_hba1c",
)


class ProfileStore:
    """Thin repository over PatientProfile that reports DB failures uniformly."""

    def find_by_user_id(self, user_id: str) -> Optional[PatientProfile]:
        try:
            return PatientProfile.objects.filter(user_id=user_id).first()
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Profile lookup failed for {user_id}") from exc

    def upsert(self, user_id: str, fields: Dict[str, Any], completed: bool = True) -> PatientProfile:
        """
        Create or update the profile for user_id.

        A completed profile is returned untouched, which makes a replayed
        terminal step harmless.
        """
        defaults = self._clean(fields)
        defaults["completed"] = completed
        if completed:
            defaults["onboarded_at"] = timezone.now()

        try:
            with transaction.atomic():
                existing = (
                    PatientProfile.objects.select_for_update()
                    .filter(user_id=user_id)
                    .first()
                )
                if existing is not None and existing.completed:
                    logger.info(f"Profile for {user_id} already completed, leaving it unchanged")
                    return existing

                profile, created = PatientProfile.objects.update_or_create(
                    user_id=user_id, defaults=defaults
                )
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Profile upsert failed for {user_id}") from exc

        logger.info(f"Profile {'created' if created else 'updated'} for {user_id} (completed={completed})")
        return profile

    def set_language(self, profile: PatientProfile, language: str) -> PatientProfile:
        """The only change allowed on a completed profile."""
        try:
            PatientProfile.objects.filter(pk=profile.pk).update(
                preferred_language=language, updated_at=timezone.now()
            )
        except DatabaseError as exc:
            raise StoreUnavailableError(f"Language change failed for {profile.user_id}") from exc

        logger.info(f"Language for {profile.user_id} changed to {language}")
        profile.preferred_language = language
        return profile

    @staticmethod
    def _clean(fields: Dict[str, Any]) -> Dict[str, Any]:
        cleaned = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}
        if cleaned.get("last_hba1c") == UNKNOWN_HBA1C:
            cleaned["last_hba1c"] = None
        return cleaned
