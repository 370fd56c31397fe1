# donors/urls.py

from django.urls import path
from donors import views

app_name = 'donors'

urlpatterns = [
    # Alert feed
    path('alerts/', views.alert_feed, name='alert_feed'),
    path('alerts/<str:request_id>/accept/', views.accept_request, name='accept_request'),

    # Availability
    path('availability/toggle/', views.toggle_availability, name='toggle_availability'),

    # Session
    path('logout/', views.logout, name='logout'),
]

# Available endpoints:
# GET  /donors/alerts/                     - Visible requests for the session donor
# POST /donors/alerts/{id}/accept/         - Accept a request, returns refreshed feed
# POST /donors/availability/toggle/        - Switch between available and offline
# POST /donors/logout/                     - Forget the session donor
