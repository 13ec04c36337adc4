import os
from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from pricing.models import PricingFactor
from profiles.models import Profile

DEMO_USERS = {
    Profile.Role.DENTIST: {
        "email": "dentist@example.com",
        "password": "password123",
        "first_name": "Marie",
        "last_name": "Dupont",
        "profile": {"practice_name": "Cabinet Dentaire Dupont", "license_number": "DEN-0001", "city": "Paris"},
    },
    Profile.Role.SUPPLIER: {
        "email": "supplier@example.com",
        "password": "password123",
        "first_name": "Wei",
        "last_name": "Zhang",
        "profile": {"company_name": "Paradigm Lab", "business_registration": "SUP-0001", "preferred_language": "zh"},
    },
}

CATEGORY_FACTORS = (
    ("Crown Pricing Factor", "crown", "1.60"),
    ("Bridge Pricing Factor", "bridge", "1.70"),
    ("Implant Pricing Factor", "implant", "2.00"),
)


class Command(BaseCommand):
    help = "Create or update the demo admin, dentist and supplier plus default pricing factors."

    def add_arguments(self, parser):
        parser.add_argument("--admin-email", default=os.environ.get("ADMIN_EMAIL", "admin@example.com"))
        parser.add_argument("--admin-password", default=os.environ.get("ADMIN_PASSWORD", "admin123456"))

    def _upsert_user(self, email, password, role, first_name="", last_name="", profile=None):
        User = get_user_model()
        u, created = User.objects.get_or_create(
            username=email,
            defaults={"email": email, "first_name": first_name, "last_name": last_name},
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created user '{email}'"))
        else:
            self.stdout.write(f"User '{email}' already exists")

        # set (or reset) password so the demo credentials always work
        u.set_password(password)
        u.is_active = True
        u.save(update_fields=["password", "is_active"])

        prof, _ = Profile.objects.get_or_create(user=u, defaults={"role": role})
        prof.role = role
        prof.is_verified = True
        for attr, val in (profile or {}).items():
            setattr(prof, attr, val)
        prof.save()
        return u

    @transaction.atomic
    def handle(self, *args, **options):
        admin = self._upsert_user(options["admin_email"], options["admin_password"], Profile.Role.ADMIN)
        admin.is_staff = True
        admin.is_superuser = True
        admin.save(update_fields=["is_staff", "is_superuser"])

        for role, cfg in DEMO_USERS.items():
            self._upsert_user(
                cfg["email"], cfg["password"], role,
                first_name=cfg["first_name"], last_name=cfg["last_name"], profile=cfg["profile"],
            )

        _, created = PricingFactor.objects.get_or_create(
            name="Default Pricing Factor",
            is_default=True,
            defaults={
                "factor": Decimal(settings.DEFAULT_PRICING_FACTOR),
                "description": "Default pricing factor for all orders",
                "created_by": admin,
            },
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Default pricing factor x{settings.DEFAULT_PRICING_FACTOR} created"))

        for name, category, factor in CATEGORY_FACTORS:
            PricingFactor.objects.get_or_create(
                name=name,
                is_default=True,
                category=category,
                defaults={
                    "factor": Decimal(factor),
                    "description": f"Pricing factor for {category} prostheses",
                    "created_by": admin,
                },
            )

        self.stdout.write(self.style.SUCCESS("Demo data ready."))
