"""
Gluco Sahayak Django Settings - Base
Shared by every environment. Secrets and hosts come from the environment.
"""

import os
from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parent.parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    AI_PARSER_ENABLED=(bool, False),
)
environ.Env.read_env(os.path.join(BASE_DIR, '.env'))

SECRET_KEY = env('SECRET_KEY', default='django-insecure-change-me')

DEBUG = env('DEBUG')

ALLOWED_HOSTS = env.list('ALLOWED_HOSTS', default=[])

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third party
    'rest_framework',
    'django_filters',
    'drf_spectacular',

    # Gluco Sahayak
    'apps.core',
    'apps.patients',
    'apps.onboarding',
    'apps.readings',
    'apps.messaging',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'glucosahayak.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'glucosahayak.wsgi.application'

# Database
# Every store call must be bounded: the timeouts below turn a hung database
# into an OperationalError, which the onboarding stores report as
# "store unavailable".
DATABASES = {
    'default': env.db('DATABASE_URL', default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}
if DATABASES['default']['ENGINE'].endswith('sqlite3'):
    DATABASES['default'].setdefault('OPTIONS', {})['timeout'] = env.int('DB_TIMEOUT', default=5)
else:
    DATABASES['default'].setdefault('OPTIONS', {}).update({
        'connect_timeout': env.int('DB_TIMEOUT', default=5),
        'options': f"-c statement_timeout={env.int('DB_STATEMENT_TIMEOUT_MS', default=5000)}",
    })

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'gluco-sahayak-cache',
        'TIMEOUT': 600,
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'Asia/Kolkata'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# REST framework
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.SessionAuthentication',
        'rest_framework.authentication.BasicAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.PageNumberPagination',
    'PAGE_SIZE': 50,
    'DEFAULT_THROTTLE_CLASSES': [
        'rest_framework.throttling.AnonRateThrottle',
        'rest_framework.throttling.UserRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'anon': '600/hour',
        'user': '2000/hour',
    },
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Gluco Sahayak API',
    'DESCRIPTION': 'WhatsApp diabetes companion: patient onboarding and profiles',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

# Logging
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
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
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': env('DJANGO_LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
        'apps': {
            'handlers': ['console'],
            'level': env('APP_LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
    },
}

# Gluco Sahayak onboarding configuration
GLUCO_SAHAYAK = {
    'DEFAULT_LANGUAGE': env('DEFAULT_LANGUAGE', default='en'),
    'SUPPORTED_LANGUAGES': env.list('SUPPORTED_LANGUAGES', default=['en', 'hi', 'kn', 'te']),
    'SKIPPABLE_STEPS': env.list('SKIPPABLE_STEPS', default=[]),
    'AI_PARSER_ENABLED': env('AI_PARSER_ENABLED'),
    'AI_PARSER_MODEL': env('AI_PARSER_MODEL', default='Qwen/Qwen2.5-7B-Instruct'),
    'AI_PARSER_TIMEOUT': env.int('AI_PARSER_TIMEOUT', default=8),
    'HF_TOKEN': env('HF_TOKEN', default=''),
    'MESSAGE_DEDUP_TTL': env.int('MESSAGE_DEDUP_TTL', default=600),
}
