"""URL routes for files app."""

from django.urls import path

from server.apps.files.views import FileCollectionView, FileDetailView

app_name = 'files'

urlpatterns = [
    path('files', FileCollectionView.as_view(), name='collection'),
    path('files/<str:file_id>', FileDetailView.as_view(), name='detail'),
]
