"""
WSGI config for the Gluco Sahayak webhook server.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'glucosahayak.settings.development')

application = get_wsgi_application()
