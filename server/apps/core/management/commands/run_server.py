"""Serve the gateway with the cheroot WSGI server."""

import logging
from typing import Any, final, override

from cheroot.wsgi import Server as WSGIServer
from django.conf import settings
from django.core.management.base import BaseCommand
from django.core.wsgi import get_wsgi_application

logger = logging.getLogger(__name__)


@final
class Command(BaseCommand):
    """Run the media storage gateway."""

    help = 'Run the media storage gateway'

    @override
    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            '--host',
            default=None,
            help='Address to bind to (default: HTTP_HOST)',
        )
        parser.add_argument(
            '--port',
            type=int,
            default=None,
            help='Port to bind to (default: HTTP_PORT)',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Build the application and serve it until interrupted.

        Building the application loads the middleware chain, a missing
        or malformed JWT public key raises ``ImproperlyConfigured``
        before anything is bound.
        """
        bind_addr = (
            options['host'] or settings.HTTP_HOST,
            options['port'] or settings.HTTP_PORT,
        )
        server = WSGIServer(
            bind_addr=bind_addr,
            wsgi_app=get_wsgi_application(),
            numthreads=settings.HTTP_THREADS,
            server_name='MediaStorage',
        )

        logger.info(
            'Media storage gateway %s listening on %s:%d',
            settings.APP_VERSION,
            *bind_addr,
        )
        try:
            server.start()
        except KeyboardInterrupt:
            logger.info('Shutting down...')
        finally:
            server.stop()
