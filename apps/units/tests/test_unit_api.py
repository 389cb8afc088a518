"""Tests for the unit catalogue endpoints."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.units.models import Unit
from apps.units.repositories import UnitRepository
from apps.users.models import User


class UnitAPITests(APITestCase):

    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.villa = Unit.objects.create(
            name="Villa Azul",
            unit_type=Unit.UnitType.VILLA,
            capacity=8,
            price_per_night=Decimal("350.00"),
            amenities=["pool", "wifi"],
        )
        self.cottage = Unit.objects.create(
            name="Fern Cottage",
            unit_type=Unit.UnitType.COTTAGE,
            capacity=2,
            price_per_night=Decimal("90.00"),
        )
        self.list_url = reverse("unit-list")

    def test_catalogue_is_public(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)

    def test_filters(self) -> None:
        by_type = self.client.get(self.list_url, {"unit_type": "cottage"})
        by_guests = self.client.get(self.list_url, {"guests": 4})
        by_price = self.client.get(self.list_url, {"price_max": "100"})

        self.assertEqual([u["name"] for u in by_type.data["results"]], ["Fern Cottage"])
        self.assertEqual([u["name"] for u in by_guests.data["results"]], ["Villa Azul"])
        self.assertEqual([u["name"] for u in by_price.data["results"]], ["Fern Cottage"])

    def test_only_admin_creates_units(self) -> None:
        payload = {"name": "Sea Room", "unit_type": "room", "capacity": 2, "price_per_night": "60.00"}

        anonymous = self.client.post(self.list_url, payload, format="json")
        self.client.force_authenticate(self.guest)
        customer = self.client.post(self.list_url, payload, format="json")
        self.client.force_authenticate(self.admin)
        admin = self.client.post(self.list_url, payload, format="json")

        self.assertIn(anonymous.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
        self.assertEqual(customer.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(admin.status_code, status.HTTP_201_CREATED, admin.data)
        self.assertTrue(Unit.objects.filter(name="Sea Room").exists())

    def test_amenities_must_be_strings(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("unit-detail", args=[self.villa.id]),
            {"amenities": ["pool", 3]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_repository_lookups(self) -> None:
        repo = UnitRepository()

        self.assertTrue(repo.exists(self.villa.id))
        self.assertFalse(repo.exists(999999))
        self.assertEqual(repo.name_of(self.cottage.id), "Fern Cottage")
        self.assertEqual(repo.name_of(999999), "unit #999999")
