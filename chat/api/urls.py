from django.urls import path
from .views import (
    ConversationsAPIView,
    MarkReadAPIView,
    MessageDeleteAPIView,
    OrderMessagesAPIView,
    TranslateAPIView,
    UnreadCountAPIView,
)

urlpatterns = [
    path("chat/orders/<int:order_id>/messages/", OrderMessagesAPIView.as_view(), name="order-messages"),
    path("chat/orders/<int:order_id>/read/", MarkReadAPIView.as_view(), name="order-messages-read"),
    path("chat/unread-count/", UnreadCountAPIView.as_view(), name="chat-unread-count"),
    path("chat/conversations/", ConversationsAPIView.as_view(), name="chat-conversations"),
    path("chat/messages/<int:pk>/", MessageDeleteAPIView.as_view(), name="chat-message-detail"),
    path("chat/translate/", TranslateAPIView.as_view(), name="chat-translate"),
]
