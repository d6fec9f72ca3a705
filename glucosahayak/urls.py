"""
Gluco Sahayak URL Configuration
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/v1/messaging/', include('apps.messaging.urls')),
    path('api/v1/onboarding/', include('apps.onboarding.urls')),
    path('api/v1/patients/', include('apps.patients.urls')),
    path('api/v1/readings/', include('apps.readings.urls')),

    # OpenAPI
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
