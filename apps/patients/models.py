"""
Patient Profile Model
The finalized record produced when a user completes onboarding.
Later updates (glucose logs, reminders, language changes) belong to other
collaborators; onboarding never touches a completed profile.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.models import TimeStampedModel
from apps.patients.choices import (
    DiabetesType, DietPreference, Gender, Language, MedicationType, NONE_ENTRY,
)


class PatientProfile(TimeStampedModel):
    """One profile per WhatsApp user, keyed by phone number."""

    user_id = models.CharField(
        _('user id'),
        max_length=32,
        unique=True,
        help_text=_('Sender phone number as delivered by the messaging layer')
    )

    preferred_language = models.CharField(
        _('preferred language'),
        max_length=2,
        choices=Language.choices,
        default=Language.ENGLISH
    )

    name = models.CharField(_('name'), max_length=100)

    age = models.PositiveSmallIntegerField(
        _('age'),
        validators=[MinValueValidator(1), MaxValueValidator(120)]
    )

    gender = models.CharField(_('gender'), max_length=10, choices=Gender.choices)

    emergency_contact = models.CharField(
        _('emergency contact'),
        max_length=16,
        null=True,
        blank=True,
        help_text=_('Normalised +91 mobile number; empty only when the step was skipped')
    )

    pincode = models.CharField(_('pincode'), max_length=6)

    consent_given = models.BooleanField(_('consent given'), default=False)

    diabetes_type = models.CharField(
        _('diabetes type'),
        max_length=20,
        choices=DiabetesType.choices
    )

    diabetes_duration_years = models.FloatField(
        _('diabetes duration (years)'),
        validators=[MinValueValidator(0.0), MaxValueValidator(100.0)]
    )

    medication_type = models.CharField(
        _('medication type'),
        max_length=10,
        choices=MedicationType.choices
    )

    medicines = models.JSONField(
        _('medicines'),
        default=list,
        blank=True,
        help_text=_('Recognised medicine names, or ["None"]')
    )

    diet_preference = models.CharField(
        _('diet preference'),
        max_length=20,
        choices=DietPreference.choices
    )

    comorbidities = models.JSONField(
        _('comorbidities'),
        default=list,
        blank=True,
        help_text=_('Recognised conditions, or ["None"]')
    )

    last_hba1c = models.FloatField(
        _('last HbA1c (%)'),
        null=True,
        blank=True,
        validators=[MinValueValidator(3.0), MaxValueValidator(20.0)],
        help_text=_('Empty when the patient does not know it')
    )

    completed = models.BooleanField(_('onboarding completed'), default=False)

    onboarded_at = models.DateTimeField(_('onboarded at'), null=True, blank=True)

    class Meta(TimeStampedModel.Meta):
        verbose_name = _('patient profile')
        verbose_name_plural = _('patient profiles')
        indexes = [
            models.Index(fields=['completed', 'created_at']),
            models.Index(fields=['diabetes_type', 'medication_type']),
            models.Index(fields=['pincode']),
        ]

    def __str__(self):
        return f"{self.name} ({self.user_id})"

    @property
    def is_on_insulin(self):
        return self.medication_type in (MedicationType.INSULIN, MedicationType.BOTH)

    @property
    def has_comorbidities(self):
        return bool(self.comorbidities) and self.comorbidities != [NONE_ENTRY]
