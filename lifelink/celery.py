# lifelink/celery.py
"""
Celery configuration for background request scanning
"""
import os
from celery import Celery

# Set default Django settings
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'lifelink.settings')

# Create Celery app
app = Celery('lifelink')

# Load config from Django settings (prefix: CELERY_), including the beat schedule
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()
