from django.urls import path, include
from donors import views as donor_views


urlpatterns = [
    path('health/', donor_views.health_check, name='health_check'),

    # Apps
    path('donors/', include('donors.urls')),
]
