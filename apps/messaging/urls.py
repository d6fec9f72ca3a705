from django.urls import path
from apps.messaging import views

app_name = 'messaging'

urlpatterns = [
    path('inbound/', views.InboundMessageView.as_view(), name='inbound'),
    path('health/', views.MessagingHealthCheckView.as_view(), name='health'),
]
