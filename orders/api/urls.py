from django.urls import path
from .views import OrderDetailAPIView, OrderListCreateAPIView, OrderStatsAPIView, OrderStatusAPIView

urlpatterns = [
    path("orders/", OrderListCreateAPIView.as_view(), name="order-list"),
    path("orders/stats/", OrderStatsAPIView.as_view(), name="order-stats"),
    path("orders/<int:pk>/", OrderDetailAPIView.as_view(), name="order-detail"),
    path("orders/<int:pk>/status/", OrderStatusAPIView.as_view(), name="order-status"),
]
