from django.contrib import admin

from .models import OnboardingSession


@admin.register(OnboardingSession)
class OnboardingSessionAdmin(admin.ModelAdmin):
    """
    In-progress onboarding sessions. Read-mostly: editing `current_step` by
    hand is possible but bypasses the revision check.
    """

    list_display = ('user_id', 'current_step', 'revision', 'last_updated_at', 'created_at')
    list_filter = ('current_step',)
    search_fields = ('user_id',)
    ordering = ('-last_updated_at',)
    readonly_fields = ('created_at', 'last_updated_at', 'revision')

    fieldsets = (
        ('Session', {
            'fields': ('user_id', 'current_step', 'revision')
        }),
        ('Answers so far', {
            'fields': ('fields',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_updated_at'),
            'classes': ('collapse',)
        }),
    )
