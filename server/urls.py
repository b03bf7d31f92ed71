"""Main URL mapping configuration file.

Every route under ``public/`` requires a bearer token,
service endpoints are exempt.
"""

from django.urls import include, path

from server.apps.core import views as core_views

urlpatterns = [
    path('ping', core_views.ping, name='ping'),
    path('version', core_views.version, name='version'),
    path('metrics', core_views.metrics, name='metrics'),
    path('public/v1/api/', include('server.apps.files.urls')),
]
