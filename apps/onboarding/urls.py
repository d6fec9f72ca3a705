"""
Onboarding URL Configuration
"""

from django.urls import path
from apps.onboarding import views

app_name = 'onboarding'

urlpatterns = [
    path('<str:user_id>/status/', views.OnboardingStatusView.as_view(), name='status'),
    path('<str:user_id>/reset/', views.OnboardingResetView.as_view(), name='reset'),
]
