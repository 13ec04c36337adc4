"""Files API views.

Upload and list files per order, read file info, delete, download (with
order access or through a time-limited access token link) and issue new
access tokens. All authenticated endpoints gate through the order access
check of the file's order.
"""

import logging

from django.http import FileResponse
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.api.permissions import get_accessible_order
from files.models import OrderFile
from files.services import delete_file, issue_access_token, open_file, register_download, upload_file
from .serializers import (
    AccessTokenSerializer,
    FileUploadSerializer,
    OrderFileInfoSerializer,
    OrderFileSerializer,
)

logger = logging.getLogger(__name__)


# ----------------------------- helpers (module-level) -----------------------------

def _file_for(user, pk) -> OrderFile:
    """Load a file the user may access through its order (404/403 otherwise)."""
    file = generics.get_object_or_404(OrderFile.objects.select_related("uploaded_by__profile"), pk=pk)
    file.order = get_accessible_order(user, file.order_id)
    return file


def _apply_filters(qs, params):
    category = params.get("category")
    if category:
        if category not in OrderFile.Category.values:
            raise ValidationError({"category": [f"Unknown category '{category}'."]})
        qs = qs.filter(category=category)
    file_type = params.get("file_type")
    if file_type:
        if file_type not in OrderFile.FileType.values:
            raise ValidationError({"file_type": [f"Unknown file type '{file_type}'."]})
        qs = qs.filter(file_type=file_type)
    return qs


def _download_response(file):
    try:
        handle = open_file(file)
    except FileNotFoundError:
        logger.warning("Stored bytes missing for file %s", file.pk)
        raise NotFound("File not found on storage.")
    register_download(file)
    return FileResponse(handle, as_attachment=True, filename=file.original_name)


# --------------------------------------- views ---------------------------------------

class OrderFilesAPIView(APIView):
    """GET: files of an order (filters category/file_type). POST: multipart upload."""

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def get(self, request, order_id: int):
        order = get_accessible_order(request.user, order_id)
        qs = _apply_filters(order.files.select_related("uploaded_by__profile"), request.query_params)
        data = OrderFileSerializer(qs.order_by("-created_at", "-id"), many=True).data
        return Response(data, status=status.HTTP_200_OK)

    def post(self, request, order_id: int):
        order = get_accessible_order(request.user, order_id)
        if "file" not in request.FILES:
            raise ValidationError({"file": ["No file uploaded."]})
        serializer = FileUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        file = upload_file(
            order,
            request.user,
            data["file"],
            category=data.get("category", OrderFile.Category.OTHER),
            description=data.get("description", ""),
        )
        return Response(OrderFileSerializer(file).data, status=status.HTTP_201_CREATED)


class FileDetailAPIView(APIView):
    """GET: file info incl. human readable size. DELETE: remove row and bytes."""

    permission_classes = [IsAuthenticated]

    def get(self, request, pk: int):
        file = _file_for(request.user, pk)
        return Response(OrderFileInfoSerializer(file).data, status=status.HTTP_200_OK)

    def delete(self, request, pk: int):
        file = _file_for(request.user, pk)
        delete_file(file)
        return Response({"detail": "File deleted successfully."}, status=status.HTTP_200_OK)


class FileDownloadAPIView(APIView):
    """GET /api/files/{id}/download/ -> attachment, for parties of the order."""

    permission_classes = [IsAuthenticated]

    def get(self, request, pk: int):
        return _download_response(_file_for(request.user, pk))


class FileAccessTokenAPIView(APIView):
    """POST /api/files/{id}/access-token/ -> new link token valid for 24 hours."""

    permission_classes = [IsAuthenticated]

    def post(self, request, pk: int):
        file = issue_access_token(_file_for(request.user, pk))
        return Response(AccessTokenSerializer(file).data, status=status.HTTP_200_OK)


class TokenDownloadAPIView(APIView):
    """GET /api/files/download/{token}/ -> attachment, no login required."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request, token: str):
        file = generics.get_object_or_404(OrderFile, access_token=token)
        if not file.is_accessible():
            logger.info("Expired access token used for file %s", file.pk)
            raise PermissionDenied("File access expired.")
        return _download_response(file)
