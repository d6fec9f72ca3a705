from django.contrib import admin

from .models import PatientProfile


@admin.register(PatientProfile)
class PatientProfileAdmin(admin.ModelAdmin):
    """
    Admin configuration for onboarded patient profiles.
    """

    list_display = ('user_id', 'name', 'age', 'diabetes_type', 'medication_type',
                    'preferred_language', 'completed', 'onboarded_at')
    list_filter = ('completed', 'diabetes_type', 'medication_type', 'preferred_language',
                   'diet_preference', 'gender')
    search_fields = ('user_id', 'name', 'pincode')
    ordering = ('-created_at',)
    readonly_fields = ('created_at', 'updated_at', 'onboarded_at')

    fieldsets = (
        ('Patient', {
            'fields': ('user_id', 'name', 'age', 'gender', 'preferred_language')
        }),
        ('Contact', {
            'fields': ('emergency_contact', 'pincode', 'consent_given')
        }),
        ('Diabetes', {
            'fields': ('diabetes_type', 'diabetes_duration_years', 'medication_type',
                       'medicines', 'diet_preference', 'comorbidities', 'last_hba1c')
        }),
        ('Status', {
            'fields': ('completed', 'onboarded_at', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
