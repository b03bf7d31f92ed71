"""HTTP server settings."""

from server.settings.components import config

# Host and port the cheroot WSGI server binds to
HTTP_HOST = config('HTTP_HOST', default='0.0.0.0')  # noqa: S104
HTTP_PORT = config('HTTP_PORT', cast=int, default=3000)

# Worker threads serving requests concurrently
HTTP_THREADS = config('HTTP_THREADS', cast=int, default=10)
