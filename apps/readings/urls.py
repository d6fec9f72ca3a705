from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'glucose', views.GlucoseReadingViewSet, basename='glucose')

app_name = 'readings'

urlpatterns = [
    path('', include(router.urls)),
]
