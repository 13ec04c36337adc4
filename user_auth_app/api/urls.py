from django.urls import path
from .views import ChangePasswordView, LoginView, RegistrationView

urlpatterns = [
    path("auth/register/", RegistrationView.as_view(), name="registration"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/change-password/", ChangePasswordView.as_view(), name="change-password"),
]
