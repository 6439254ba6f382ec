import datetime

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from membership.models import Member, MemberStatus, MembershipPlan
from membership.stores import DjangoStore, InMemoryStore

User = get_user_model()


def aware(year, month, day, hour=12):
    return timezone.make_aware(datetime.datetime(year, month, day, hour))


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@example.com", password="StrongPass123!", name="Gym Admin", role=User.Role.ADMIN
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(email="desk@example.com", password="StrongPass123!", name="Front Desk")


@pytest.fixture
def store(db):
    return DjangoStore()


@pytest.fixture
def monthly_plan(db):
    return MembershipPlan.objects.create(name="Monthly", price=2999, duration=1, duration_type="monthly")


@pytest.fixture
def member(db):
    return Member.objects.create(first_name="Sarah", last_name="Williams", email="sarah@example.com")


@pytest.fixture
def memory_store():
    store = InMemoryStore()
    store.add_user(email="admin@example.com", name="Gym Admin")
    return store


@pytest.fixture
def memory_plan(memory_store):
    return memory_store.add_plan(name="Monthly", price=2999, duration=1, duration_type="monthly")


@pytest.fixture
def memory_member(memory_store):
    return memory_store.create_member(
        first_name="Emma", last_name="Garcia", email="emma@example.com", status=MemberStatus.PENDING
    )
