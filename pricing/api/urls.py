from django.urls import path
from .views import (
    PricingFactorDetailAPIView,
    PricingFactorListCreateAPIView,
    PricingFactorResolveAPIView,
)

urlpatterns = [
    path("admin/pricing-factors/", PricingFactorListCreateAPIView.as_view(), name="pricing-factor-list"),
    path("admin/pricing-factors/resolve/", PricingFactorResolveAPIView.as_view(), name="pricing-factor-resolve"),
    path("admin/pricing-factors/<int:pk>/", PricingFactorDetailAPIView.as_view(), name="pricing-factor-detail"),
]
