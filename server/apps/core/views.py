"""Service endpoints available without authentication."""

from django.apps import apps
from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET

from server.apps.authentication.decorators import bearer_exempt
from server.apps.core.responses import json_response


@bearer_exempt
@require_GET
def ping(request: HttpRequest) -> JsonResponse:
    """Liveness probe."""
    return json_response('pong')


@bearer_exempt
@require_GET
def version(request: HttpRequest) -> JsonResponse:
    """Report the running application version."""
    return json_response(settings.APP_VERSION)


@bearer_exempt
@require_GET
def metrics(request: HttpRequest) -> HttpResponse:
    """Expose HTTP metrics in Prometheus text format."""
    body, content_type = apps.get_app_config('core').metrics.render()  # type: ignore[attr-defined]
    return HttpResponse(body, content_type=content_type)
