"""
Onboarding Session Model
One row per user who has started but not finished onboarding.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.onboarding.steps import INITIAL_STEP, OnboardingStep


class OnboardingSession(models.Model):
    """
    Partial onboarding state: the current question and the answers so far.

    `revision` increases on every advance so concurrent deliveries of the same
    answer can be detected with a compare-and-swap update.
    """

    user_id = models.CharField(_('user id'), max_length=32, unique=True)

    current_step = models.CharField(
        _('current step'),
        max_length=30,
        choices=[(step.value, step.value) for step in OnboardingStep],
        default=INITIAL_STEP.value
    )

    fields = models.JSONField(
        _('collected fields'),
        default=dict,
        blank=True,
        help_text=_('Validated answers keyed by profile field name')
    )

    revision = models.PositiveIntegerField(_('revision'), default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    last_updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _('onboarding session')
        verbose_name_plural = _('onboarding sessions')
        ordering = ['-last_updated_at']
        indexes = [
            models.Index(fields=['current_step']),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.current_step}"

    @property
    def language(self):
        """Language chosen at the first step, or None before it is answered."""
        return self.fields.get("preferred_language")
