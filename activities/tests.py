# activities/tests.py
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from membership.models import Member
from .models import Activity
from .utils import record_activity

User = get_user_model()


class ActivityTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="desk@example.com", password="testpass123")
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)
        self.member = Member.objects.create(first_name="Emma", last_name="Garcia", email="emma@example.com")

        now = timezone.now()
        for minutes in range(15):
            record_activity("note", f"entry {minutes}", timestamp=now - timedelta(minutes=minutes))

    def test_recent_defaults_to_ten_newest(self):
        res = self.client.get(reverse("activities-recent"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 10)
        self.assertEqual(res.data[0]["description"], "entry 0")

    def test_recent_limit(self):
        res = self.client.get(reverse("activities-recent"), {"limit": 3})
        self.assertEqual([a["description"] for a in res.data], ["entry 0", "entry 1", "entry 2"])

        res = self.client.get(reverse("activities-recent"), {"limit": "lots"})
        self.assertEqual(len(res.data), 10)

    def test_create_stamps_current_user(self):
        res = self.client.post(
            reverse("activities-list"),
            {"activity_type": "check_in", "description": "Emma checked in", "member": self.member.id},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        entry = Activity.objects.get(activity_type="check_in")
        self.assertEqual(entry.user, self.user)
        self.assertEqual(entry.member, self.member)

    def test_list_includes_member_name(self):
        record_activity("note", "Asked about yoga", member_id=self.member.id)
        res = self.client.get(reverse("activities-list"), {"member": self.member.id})
        self.assertEqual(res.data[0]["member_name"], "Emma Garcia")

    def test_activities_are_append_only(self):
        entry = Activity.objects.first()
        res = self.client.delete(reverse("activities-detail", args=[entry.id]))
        self.assertEqual(res.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
