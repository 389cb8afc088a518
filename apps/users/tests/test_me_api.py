"""Tests for authentication and the profile endpoint."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User
from shared.domain.actors import Admin, Actor, Owner


class AuthAPITests(APITestCase):

    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="Guest@Example.com",
            password="GuestPass123",
            phone="+63 917-555-0101",
        )

    def test_user_is_created_with_normalized_fields(self) -> None:
        self.assertEqual(self.user.email, "Guest@example.com")
        self.assertEqual(self.user.phone, "+639175550101")
        self.assertEqual(self.user.role, User.RoleChoices.CUSTOMER)
        self.assertFalse(self.user.is_admin())

    def test_token_obtain_and_me(self) -> None:
        response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "Guest@example.com", "password": "GuestPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get(reverse("auth:me"))

        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["email"], "Guest@example.com")
        self.assertFalse(me.data["is_admin"])

    def test_wrong_password_is_rejected(self) -> None:
        response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "Guest@example.com", "password": "nope"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class ActorTests(APITestCase):

    def test_actor_follows_role(self) -> None:
        customer = User.objects.create_user(email="c@example.com", password="CustomerPass123")
        admin = User.objects.create_user(
            email="a@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        superuser = User.objects.create_superuser(email="s@example.com", password="SuperPass123")

        self.assertIsInstance(Actor.from_user(customer), Owner)
        self.assertIsInstance(Actor.from_user(admin), Admin)
        self.assertIsInstance(Actor.from_user(superuser), Admin)
        self.assertTrue(Actor.from_user(admin).can_manage(customer.id))
        self.assertFalse(Actor.from_user(customer).can_manage(admin.id))
