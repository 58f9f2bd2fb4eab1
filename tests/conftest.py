import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from places.models import Place


@pytest.fixture
def owner(db):
    return get_user_model().objects.create_user(username="owner", email="owner@example.com", password="pw-owner-123")


@pytest.fixture
def stranger(db):
    return get_user_model().objects.create_user(username="stranger", email="stranger@example.com", password="pw-stranger-123")


@pytest.fixture
def staff(db):
    return get_user_model().objects.create_user(
        username="staff", email="staff@example.com", password="pw-staff-123", is_staff=True
    )


@pytest.fixture
def make_place(owner):
    def _make(**kwargs):
        data = {
            "title": "Kız Kulesi",
            "category": Place.Category.OTHER,
            "city": "İstanbul",
            "district": "Üsküdar",
            "is_approved": True,
            "owner": owner,
        }
        data.update(kwargs)
        return Place.objects.create(**data)
    return _make


@pytest.fixture
def api_client():
    return APIClient()
