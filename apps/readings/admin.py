from django.contrib import admin

from .models import GlucoseReading


@admin.register(GlucoseReading)
class GlucoseReadingAdmin(admin.ModelAdmin):
    list_display = ('profile', 'value_mg_dl', 'risk_level', 'source', 'recorded_at')
    list_filter = ('risk_level', 'source')
    search_fields = ('profile__user_id', 'profile__name')
    ordering = ('-recorded_at',)
    readonly_fields = ('created_at', 'updated_at')
    raw_id_fields = ('profile',)
