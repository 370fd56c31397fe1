# lifelink/settings.py
"""
Django settings for the LifeLink donor alert service.
Values come from the environment where deployments differ.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('SECRET_KEY', 'lifelink-dev-secret-key')
DEBUG = os.environ.get('DEBUG', 'True') == 'True'
ALLOWED_HOSTS = os.environ.get('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'django.contrib.sessions',
    'rest_framework',
    'donors',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
]

ROOT_URLCONF = 'lifelink.urls'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
USE_TZ = True
TIME_ZONE = 'UTC'


# ============================================
# CACHE / SHARED STORE
# ============================================
REDIS_URL = os.environ.get('REDIS_URL')

if REDIS_URL:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.redis.RedisCache',
            'LOCATION': REDIS_URL,
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'lifelink',
        }
    }

# Donor sessions live in the cache, no session table needed
SESSION_ENGINE = 'django.contrib.sessions.backends.cache'


# ============================================
# REST FRAMEWORK
# ============================================
REST_FRAMEWORK = {
    # Login lives outside this service; views run on the session donor profile
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
}


# ============================================
# LIFELINK DONOR ALERTS
# ============================================
LIFELINK_STORE_CACHE = 'default'
LIFELINK_SESSION_KEY = 'lifelink_donor_session'
LIFELINK_REQUESTS_KEY = 'lifelink_requests'
LIFELINK_AVAILABILITY_KEY = 'lifelink_donor_available'

LIFELINK_MAX_DISTANCE_KM = float(os.environ.get('LIFELINK_MAX_DISTANCE_KM', 10))
LIFELINK_POLL_INTERVAL_MS = int(os.environ.get('LIFELINK_POLL_INTERVAL_MS', 2000))

# Manipal Hospital, Old Airport Road - used for requests posted without coordinates
LIFELINK_DEFAULT_HOSPITAL = (12.9606, 77.6416)
LIFELINK_DEFAULT_HOSPITAL_NAME = 'Manipal Hospital'

# Shown until a real donor session exists
LIFELINK_DEMO_DONOR = {
    'id': 'D-101',
    'name': 'Rahul Sharma',
    'bloodGroup': 'A+',
    'lat': 12.965,
    'lng': 77.65,
}


# ============================================
# CELERY
# ============================================
CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', REDIS_URL or 'redis://localhost:6379/0')
CELERY_TASK_ALWAYS_EAGER = os.environ.get('CELERY_TASK_ALWAYS_EAGER', 'False') == 'True'
CELERY_BEAT_SCHEDULE = {
    'scan-donation-requests': {
        'task': 'donors.tasks.scan_requests',
        'schedule': LIFELINK_POLL_INTERVAL_MS / 1000,
    },
}


# ============================================
# LOGGING
# ============================================
LIFELINK_LOG_LEVEL = os.environ.get('LIFELINK_LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'donors': {
            'handlers': ['console'],
            'level': LIFELINK_LOG_LEVEL,
        },
    },
}
