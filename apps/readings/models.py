"""
Glucose Reading Model
Readings a registered patient sends over chat ("sugar 120"), with the
risk band they fell into when logged.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.models import TimeStampedModel
from apps.patients.models import PatientProfile


class RiskLevel(models.TextChoices):
    CRITICAL_LOW = 'critical_low', _('Critical low (below 70)')
    NORMAL = 'normal', _('Normal (70-130)')
    ELEVATED = 'elevated', _('Elevated (131-180)')
    CRITICAL_HIGH = 'critical_high', _('Critical high (above 180)')


class ReadingSource(models.TextChoices):
    MANUAL = 'manual', _('Manual chat entry')


class GlucoseReading(TimeStampedModel):
    """One blood glucose value in mg/dL."""

    profile = models.ForeignKey(
        PatientProfile,
        on_delete=models.CASCADE,
        related_name='glucose_readings'
    )

    value_mg_dl = models.PositiveSmallIntegerField(
        _('glucose (mg/dL)'),
        validators=[MinValueValidator(20), MaxValueValidator(600)]
    )

    risk_level = models.CharField(
        _('risk level'),
        max_length=15,
        choices=RiskLevel.choices,
        db_index=True
    )

    source = models.CharField(
        _('source'),
        max_length=10,
        choices=ReadingSource.choices,
        default=ReadingSource.MANUAL
    )

    recorded_at = models.DateTimeField(_('recorded at'), default=timezone.now)

    class Meta(TimeStampedModel.Meta):
        verbose_name = _('glucose reading')
        verbose_name_plural = _('glucose readings')
        ordering = ['-recorded_at']
        indexes = [
            models.Index(fields=['profile', 'recorded_at']),
        ]

    def __str__(self):
        return f"{self.value_mg_dl} mg/dL ({self.profile.user_id})"

    @property
    def is_critical(self):
        return self.risk_level in (RiskLevel.CRITICAL_LOW, RiskLevel.CRITICAL_HIGH)
