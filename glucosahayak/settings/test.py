"""
Gluco Sahayak Django Settings - Test Environment
"""

from .base import *


DEBUG = False

SECRET_KEY = 'test-secret-key'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
        'OPTIONS': {'timeout': 5},
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'gluco-sahayak-test-cache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []

LOGGING['loggers']['apps']['level'] = 'WARNING'

GLUCO_SAHAYAK.update({
    'DEFAULT_LANGUAGE': 'en',
    'SUPPORTED_LANGUAGES': ['en', 'hi', 'kn', 'te'],
    'SKIPPABLE_STEPS': [],
    'AI_PARSER_ENABLED': False,
    'HF_TOKEN': '',
})
