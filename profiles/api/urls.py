from django.urls import path
from .views import (
    AvailableDentistsView,
    AvailableSuppliersView,
    ProfileView,
    UserDetailView,
    UserListView,
    UserStatsView,
    UserStatusView,
)

urlpatterns = [
    path("profile/", ProfileView.as_view(), name="profile"),
    path("users/", UserListView.as_view(), name="user-list"),
    path("users/stats/", UserStatsView.as_view(), name="user-stats"),
    path("users/dentists/available/", AvailableDentistsView.as_view(), name="available-dentists"),
    path("users/suppliers/available/", AvailableSuppliersView.as_view(), name="available-suppliers"),
    path("users/<int:pk>/", UserDetailView.as_view(), name="user-detail"),
    path("users/<int:pk>/status/", UserStatusView.as_view(), name="user-status"),
]
