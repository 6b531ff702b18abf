"""
Django settings for the Task Manager API.

All deployment-specific values come from environment variables. A `.env`
file in the project root is loaded first when present.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from .database import get_database_config

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env', override=False)


# =============================================================================
# Runtime Mode
# =============================================================================

APP_ENV = os.getenv('APP_ENV', 'development').lower()
DEBUG = APP_ENV == 'development'

SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-dev-only-change-me')

ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if h.strip()]
if DEBUG:
    ALLOWED_HOSTS.append('*')


# =============================================================================
# Applications
# =============================================================================

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'corsheaders',
    'apps.core',
    'apps.identity',
    'apps.tasks',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'config.urls'
ASGI_APPLICATION = 'config.asgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {'context_processors': []},
    },
]


# =============================================================================
# Database
# =============================================================================

DATABASES = {
    'default': get_database_config(BASE_DIR),
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# =============================================================================
# Authentication
# =============================================================================

AUTH_USER_MODEL = 'identity.User'

JWT_SECRET = os.getenv('JWT_SECRET', SECRET_KEY)
JWT_EXPIRES_IN_DAYS = int(os.getenv('JWT_EXPIRES_IN_DAYS', '7'))


# =============================================================================
# CORS
# =============================================================================

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv('CORS_ORIGIN', 'http://localhost:3000').split(',')
    if origin.strip()
]
CORS_ALLOW_CREDENTIALS = True


# =============================================================================
# Internationalization
# =============================================================================

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True


# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django.db.backends': {
            'handlers': ['console'],
            'level': 'DEBUG' if os.getenv('LOG_SQL', 'false').lower() == 'true' else 'WARNING',
            'propagate': False,
        },
    },
}
