"""Chat API serializers.

Message output includes ``display_message``: the text in the viewer's
language when a translation exists, otherwise the original.
"""

from rest_framework import serializers

from profiles.api.serializers import UserSummarySerializer
from profiles.models import Profile, language_of
from chat.models import ChatMessage


class MessageCreateSerializer(serializers.Serializer):
    message = serializers.CharField(min_length=1, max_length=2000, trim_whitespace=True)
    message_type = serializers.ChoiceField(
        choices=[
            ChatMessage.MessageType.TEXT,
            ChatMessage.MessageType.FILE,
            ChatMessage.MessageType.IMAGE,
        ],
        required=False,
        default=ChatMessage.MessageType.TEXT,
    )
    reply_to_id = serializers.IntegerField(required=False, allow_null=True)
    file_id = serializers.IntegerField(required=False, allow_null=True)


class TranslateSerializer(serializers.Serializer):
    message_id = serializers.IntegerField()
    target_language = serializers.ChoiceField(choices=Profile.Language.choices)


class ChatMessageSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    display_message = serializers.SerializerMethodField()

    class Meta:
        model = ChatMessage
        fields = [
            "id",
            "order",
            "user",
            "message",
            "display_message",
            "original_language",
            "translated_message",
            "target_language",
            "translation_status",
            "message_type",
            "file",
            "file_url",
            "file_name",
            "file_size",
            "file_type",
            "is_read",
            "read_at",
            "is_system_message",
            "system_action",
            "reply_to",
            "metadata",
            "created_at",
        ]
        read_only_fields = fields

    def get_display_message(self, obj):
        request = self.context.get("request")
        viewer = getattr(request, "user", None)
        return obj.display_message(language_of(viewer))
