from django.urls import path
from .views import (
    OrderQuotesAPIView,
    QuoteAcceptAPIView,
    QuoteDetailAPIView,
    QuoteListCreateAPIView,
    QuoteRejectAPIView,
)

urlpatterns = [
    path("quotes/", QuoteListCreateAPIView.as_view(), name="quote-list"),
    path("quotes/<int:pk>/", QuoteDetailAPIView.as_view(), name="quote-detail"),
    path("quotes/<int:pk>/accept/", QuoteAcceptAPIView.as_view(), name="quote-accept"),
    path("quotes/<int:pk>/reject/", QuoteRejectAPIView.as_view(), name="quote-reject"),
    path("orders/<int:order_id>/quotes/", OrderQuotesAPIView.as_view(), name="order-quotes"),
]
