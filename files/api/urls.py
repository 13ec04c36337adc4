from django.urls import path
from .views import (
    FileAccessTokenAPIView,
    FileDetailAPIView,
    FileDownloadAPIView,
    OrderFilesAPIView,
    TokenDownloadAPIView,
)

urlpatterns = [
    path("orders/<int:order_id>/files/", OrderFilesAPIView.as_view(), name="order-files"),
    path("files/download/<str:token>/", TokenDownloadAPIView.as_view(), name="file-token-download"),
    path("files/<int:pk>/", FileDetailAPIView.as_view(), name="file-detail"),
    path("files/<int:pk>/download/", FileDownloadAPIView.as_view(), name="file-download"),
    path("files/<int:pk>/access-token/", FileAccessTokenAPIView.as_view(), name="file-access-token"),
]
