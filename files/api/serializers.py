"""Files API serializers."""

from rest_framework import serializers

from profiles.api.serializers import UserSummarySerializer
from files.models import OrderFile


class FileUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    category = serializers.ChoiceField(choices=OrderFile.Category.choices, required=False)
    description = serializers.CharField(required=False, allow_blank=True)


class OrderFileSerializer(serializers.ModelSerializer):
    """File metadata; the access token is never part of listings."""

    uploaded_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = OrderFile
        fields = [
            "id",
            "order",
            "uploaded_by",
            "file_name",
            "original_name",
            "url",
            "size",
            "mime_type",
            "file_type",
            "category",
            "description",
            "is_public",
            "expires_at",
            "download_count",
            "last_downloaded_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderFileInfoSerializer(OrderFileSerializer):
    human_readable_size = serializers.CharField(read_only=True)

    class Meta(OrderFileSerializer.Meta):
        fields = OrderFileSerializer.Meta.fields + ["human_readable_size"]
        read_only_fields = fields


class AccessTokenSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderFile
        fields = ["id", "access_token", "expires_at"]
        read_only_fields = fields
