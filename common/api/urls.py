from django.urls import path
from .views import AdminDashboardAPIView, AdminStatsAPIView

urlpatterns = [
    path("admin/dashboard/", AdminDashboardAPIView.as_view(), name="admin-dashboard"),
    path("admin/stats/", AdminStatsAPIView.as_view(), name="admin-stats"),
]
