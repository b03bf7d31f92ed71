"""WSGI config for the media storage gateway.

It exposes the WSGI callable as a module-level variable named
``application``. Loading it builds the middleware chain, which
fails when the JWT public key is missing or malformed.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'server.settings')

application = get_wsgi_application()
