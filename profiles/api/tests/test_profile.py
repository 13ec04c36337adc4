from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.testing import bearer, make_dentist, make_supplier


class ProfileTests(APITestCase):
    def setUp(self):
        self.dentist = make_dentist("owner@mail.de")
        self.supplier = make_supplier("lab@mail.de")
        self.url = reverse("profile")

    def test_get_own_profile(self):
        bearer(self.client, self.dentist)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["id"], self.dentist.id)
        self.assertEqual(res.data["role"], "dentist")
        for key in ("phone", "address", "company_name", "practice_name"):
            self.assertIsNotNone(res.data[key])

    def test_requires_authentication(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_patch_contact_and_language(self):
        bearer(self.client, self.dentist)
        res = self.client.patch(
            self.url,
            {"first_name": "Claire", "city": "Lyon", "preferred_language": "en"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["first_name"], "Claire")
        self.assertEqual(res.data["city"], "Lyon")
        self.assertEqual(res.data["preferred_language"], "en")
        self.dentist.profile.refresh_from_db()
        self.assertEqual(self.dentist.profile.city, "Lyon")

    def test_dentist_edits_practice_fields(self):
        bearer(self.client, self.dentist)
        res = self.client.patch(self.url, {"license_number": "LIC-9"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["license_number"], "LIC-9")

    def test_role_specific_fields_of_other_role_rejected(self):
        bearer(self.client, self.dentist)
        res = self.client.patch(self.url, {"company_name": "Not mine"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("company_name", res.data["errors"])

        bearer(self.client, self.supplier)
        res = self.client.patch(self.url, {"practice_name": "Not mine"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_language_rejected(self):
        bearer(self.client, self.supplier)
        res = self.client.patch(self.url, {"preferred_language": "de"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
