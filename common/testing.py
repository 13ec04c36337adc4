"""Shared helpers for the API test suites."""

from django.contrib.auth import get_user_model

from profiles.models import Profile
from user_auth_app.tokens import issue_token

User = get_user_model()

PASSWORD = "Sup3r-Secret-Pass!"


def make_user(email: str, role: str, **profile_fields):
    """Create an active user with a profile of the given role."""
    user = User.objects.create_user(username=email, email=email, password=PASSWORD)
    Profile.objects.create(user=user, role=role, **profile_fields)
    return user


def make_admin(email="admin@example.com"):
    return make_user(email, Profile.Role.ADMIN)


def make_dentist(email="dentist@example.com", **profile_fields):
    profile_fields.setdefault("practice_name", "Cabinet Dentaire")
    return make_user(email, Profile.Role.DENTIST, **profile_fields)


def make_supplier(email="supplier@example.com", **profile_fields):
    profile_fields.setdefault("company_name", "Lab Prothèses")
    return make_user(email, Profile.Role.SUPPLIER, **profile_fields)


def bearer(client, user):
    """Attach a fresh bearer token for `user` to the test client."""
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")


def make_order(dentist, supplier, **fields):
    """Create an order through the workflow service, as the dentist."""
    from orders.services import create_order

    fields.setdefault("title", "Crown 26")
    fields.setdefault("prosthesis_type", "crown")
    fields.setdefault("material", "zirconia")
    return create_order(dentist, dentist, supplier, **fields)
