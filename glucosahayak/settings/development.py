"""
Gluco Sahayak Django Settings - Development Environment
"""

from .base import *


# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# Database - Use local PostgreSQL for development
# DATABASES = {
#     'default': {
#         'ENGINE': 'django.db.backends.postgresql',
#         'NAME': env('DB_NAME', default='glucosahayak_dev'),
#         'USER': env('DB_USER', default='glucosahayak_user'),
#         'PASSWORD': env('DB_PASSWORD', default='dev_password'),
#         'HOST': env('DB_HOST', default='localhost'),
#         'PORT': env('DB_PORT', default='5432'),
#         'OPTIONS': {'connect_timeout': 5},
#     }
# }
# Database - Use SQLite for quick development
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.path.join(BASE_DIR, 'db.sqlite3'),
        'OPTIONS': {'timeout': 5},
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'gluco-sahayak-dev-cache',
        'TIMEOUT': 1800,  # 30 minutes
    }
}

# Email - Use console backend in development
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Disable throttling in development
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    'anon': '10000/hour',
    'user': '10000/hour'
}

# Enhanced logging for development
LOGGING['loggers']['apps']['level'] = 'DEBUG'

# Security settings - relaxed for development
SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# Gluco Sahayak Development Overrides
GLUCO_SAHAYAK.update({
    'MESSAGE_DEDUP_TTL': 60,  # shorter window for manual webhook replays
})
