"""Chat API views.

Per-order message list (also marks messages read), posting, explicit
mark-read, unread counter, conversation overview, deleting own messages and
the translate endpoint. Order based endpoints gate through the order access
check.
"""

from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import ChatPagination
from orders.api.permissions import get_accessible_order
from orders.api.serializers import OrderSerializer
from profiles.models import language_of
from chat.models import ChatMessage
from chat import services
from .serializers import ChatMessageSerializer, MessageCreateSerializer, TranslateSerializer


# ----------------------------- helpers (module-level) -----------------------------

def _message_for(user, pk) -> ChatMessage:
    msg = generics.get_object_or_404(ChatMessage.objects.select_related("user__profile"), pk=pk)
    msg.order = get_accessible_order(user, msg.order_id)
    return msg


def _related_or_400(qs, pk, field):
    if pk is None:
        return None
    obj = qs.filter(pk=pk).first()
    if obj is None:
        raise ValidationError({field: ["Not found."]})
    return obj


# --------------------------------------- views ---------------------------------------

class OrderMessagesAPIView(generics.ListCreateAPIView):
    """GET: messages of an order, oldest first; marks others' messages read.
    POST: send a message.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ChatMessageSerializer
    pagination_class = ChatPagination

    def get_queryset(self):
        self.order = get_accessible_order(self.request.user, self.kwargs["order_id"])
        return self.order.messages.select_related("user__profile").order_by("created_at", "id")

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        services.mark_read(self.order, request.user)
        return response

    def create(self, request, *args, **kwargs):
        order = get_accessible_order(request.user, kwargs["order_id"])
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        reply_to = _related_or_400(ChatMessage.objects.all(), data.get("reply_to_id"), "reply_to_id")
        file = _related_or_400(order.files.all(), data.get("file_id"), "file_id")
        msg = services.post_message(
            order,
            request.user,
            data["message"],
            message_type=data["message_type"],
            reply_to=reply_to,
            file=file,
        )
        return Response(
            ChatMessageSerializer(msg, context={"request": request}).data,
            status=status.HTTP_201_CREATED,
        )


class MarkReadAPIView(APIView):
    """PUT/POST /api/chat/orders/{order_id}/read/"""

    permission_classes = [IsAuthenticated]

    def put(self, request, order_id: int):
        order = get_accessible_order(request.user, order_id)
        marked = services.mark_read(order, request.user)
        return Response({"detail": "Messages marked as read.", "marked": marked}, status=status.HTTP_200_OK)

    def post(self, request, order_id: int):
        return self.put(request, order_id)


class UnreadCountAPIView(APIView):
    """GET /api/chat/unread-count/"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"unread_count": services.unread_count(request.user)}, status=status.HTTP_200_OK)


class ConversationsAPIView(APIView):
    """GET /api/chat/conversations/ -> latest orders with their last message."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        language = language_of(request.user)
        data = []
        for order, last in services.conversations(request.user):
            data.append({
                "order": OrderSerializer(order).data,
                "last_message": {
                    "id": last.id,
                    "message": last.display_message(language),
                    "user_id": last.user_id,
                    "is_read": last.is_read,
                    "created_at": last.created_at,
                } if last else None,
            })
        return Response(data, status=status.HTTP_200_OK)


class MessageDeleteAPIView(APIView):
    """DELETE /api/chat/messages/{id}/ -> own, non-system messages only."""

    permission_classes = [IsAuthenticated]

    def delete(self, request, pk: int):
        msg = _message_for(request.user, pk)
        services.delete_message(msg, request.user)
        return Response({"detail": "Message deleted successfully."}, status=status.HTTP_200_OK)


class TranslateAPIView(APIView):
    """POST /api/chat/translate/ {message_id, target_language}"""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = TranslateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        msg = _message_for(request.user, data["message_id"])
        msg = services.translate_message(msg, data["target_language"])
        return Response(
            ChatMessageSerializer(msg, context={"request": request}).data,
            status=status.HTTP_200_OK,
        )
