# membership/tests.py
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from activities.models import Activity
from payments.models import Payment, PaymentStatus
from .models import Member, MemberStatus, MembershipPlan

User = get_user_model()


class BaseTestCase(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@example.com", password="testpass123", name="Gym Admin", role=User.Role.ADMIN
        )
        self.staff = User.objects.create_user(email="desk@example.com", password="testpass123")
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

        self.plan = MembershipPlan.objects.create(
            name="Monthly", price=7000, duration=1, duration_type="monthly", features=["Gym access"]
        )
        self.member = Member.objects.create(
            first_name="Sarah", last_name="Williams", email="sarah@example.com", plan=self.plan
        )


class MembershipPlanTests(BaseTestCase):
    def test_public_plans_need_no_login(self):
        MembershipPlan.objects.create(name="Retired", price=100, is_active=False)
        client = APIClient()
        res = client.get(reverse("membership-plans-public"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual([p["name"] for p in res.data], ["Monthly"])

    def test_staff_can_read_but_not_write_plans(self):
        self.client.force_authenticate(user=self.staff)
        res = self.client.get(reverse("membership-plans-list"))
        self.assertEqual(res.status_code, 200)

        res = self.client.post(
            reverse("membership-plans-list"), {"name": "Weekly", "price": 3000, "duration_type": "weekly"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_creates_plan(self):
        res = self.client.post(
            reverse("membership-plans-list"),
            {"name": "Weekly", "price": 3000, "duration": 1, "duration_type": "weekly"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(MembershipPlan.objects.count(), 2)


class MemberTests(BaseTestCase):
    def test_list_expires_lapsed_members(self):
        self.member.status = MemberStatus.ACTIVE
        self.member.expiry_date = timezone.localdate() - timedelta(days=1)
        self.member.save()

        res = self.client.get(reverse("members-list"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data[0]["status"], "expired")
        self.assertEqual(res.data[0]["plan"]["name"], "Monthly")
        self.assertEqual(Activity.objects.filter(activity_type="membership_expired").count(), 1)

        # A second listing finds nothing left to expire
        self.client.get(reverse("members-list"))
        self.assertEqual(Activity.objects.filter(activity_type="membership_expired").count(), 1)

    def test_member_expiring_today_stays_active(self):
        self.member.status = MemberStatus.ACTIVE
        self.member.expiry_date = timezone.localdate()
        self.member.save()

        res = self.client.get(reverse("members-list"))
        self.assertEqual(res.data[0]["status"], "active")

    def test_create_member_records_activity(self):
        payload = {"first_name": "Luis", "last_name": "Quispe", "email": "luis@example.com", "plan_id": self.plan.id}
        res = self.client.post(reverse("members-list"), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "pending")
        entry = Activity.objects.get(activity_type="member_created")
        self.assertEqual(entry.description, "New member added: Luis Quispe")
        self.assertEqual(entry.user_id, self.admin.id)

    def test_patch_member_goes_through_ledger(self):
        url = reverse("members-detail", args=[self.member.id])
        res = self.client.patch(url, {"phone": "987654321", "plan_id": None}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["phone"], "987654321")
        self.assertIsNone(res.data["plan"])
        self.member.refresh_from_db()
        self.assertIsNone(self.member.plan_id)
        self.assertTrue(Activity.objects.filter(activity_type="member_updated", member=self.member).exists())

    def test_member_detail_includes_payments_and_activities(self):
        Payment.objects.create(
            member=self.member, plan=self.plan, amount=7000, payment_method="cash", status=PaymentStatus.PENDING
        )
        Activity.objects.create(activity_type="note", description="Asked about classes", member=self.member)

        res = self.client.get(reverse("members-detail", args=[self.member.id]))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data["payments"]), 1)
        self.assertEqual(res.data["payments"][0]["plan_name"], "Monthly")
        self.assertEqual(res.data["activities"][0]["description"], "Asked about classes")

    def test_delete_member_with_payments_conflicts(self):
        Payment.objects.create(member=self.member, plan=self.plan, amount=7000, payment_method="cash")

        res = self.client.delete(reverse("members-detail", args=[self.member.id]))

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Member.objects.filter(pk=self.member.pk).exists())

    def test_delete_member(self):
        res = self.client.delete(reverse("members-detail", args=[self.member.id]))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        entry = Activity.objects.get(activity_type="member_deleted")
        self.assertEqual(entry.description, "Member deleted: Sarah Williams")

    def test_members_require_login(self):
        res = APIClient().get(reverse("members-list"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_member_ignores_status_and_expiry(self):
        payload = {
            "first_name": "Luis",
            "last_name": "Quispe",
            "email": "luis@example.com",
            "status": "active",
            "expiry_date": None,
        }
        res = self.client.post(reverse("members-list"), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "pending")
        self.assertIsNone(res.data["expiry_date"])
        created = Member.objects.get(email="luis@example.com")
        self.assertEqual(created.status, MemberStatus.PENDING)
        self.assertIsNone(created.expiry_date)

        # An active member with no expiry date would never be swept
        self.client.get(reverse("members-list"))
        created.refresh_from_db()
        self.assertEqual(created.status, MemberStatus.PENDING)

    def test_member_detail_payment_stats(self):
        Payment.objects.create(
            member=self.member, plan=self.plan, amount=7000, payment_method="cash", status=PaymentStatus.VERIFIED
        )
        Payment.objects.create(
            member=self.member, plan=self.plan, amount=7000, payment_method="yape", status=PaymentStatus.PENDING
        )
        Payment.objects.create(
            member=self.member, plan=self.plan, amount=7000, payment_method="yape", status=PaymentStatus.REJECTED
        )

        res = self.client.get(reverse("members-detail", args=[self.member.id]))

        self.assertEqual(
            res.data["stats"], {"verified_payments": 1, "pending_payments": 1, "total_payments": 3}
        )


class MemberStatsTests(BaseTestCase):
    def test_member_stats(self):
        today = timezone.localdate()
        self.member.status = MemberStatus.ACTIVE
        self.member.expiry_date = today + timedelta(days=10)
        self.member.save()
        Member.objects.create(
            first_name="Old", last_name="Timer", email="old@example.com", plan=self.plan,
            status=MemberStatus.ACTIVE, expiry_date=today - timedelta(days=1),
        )
        Member.objects.create(first_name="New", last_name="Face", email="new@example.com")
        yearly = MembershipPlan.objects.create(name="Yearly", price=70000, duration=1, duration_type="yearly")

        res = self.client.get(reverse("reports-member-stats"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            res.data["members_by_status"], {"pending": 1, "active": 1, "expired": 1, "frozen": 0}
        )
        self.assertEqual(
            res.data["plan_stats"],
            [{"id": self.plan.id, "name": "Monthly", "count": 1}, {"id": yearly.id, "name": "Yearly", "count": 0}],
        )
        self.assertEqual(res.data["total_members"], 3)
        self.assertEqual(len(res.data["monthly_signups"]), 6)
        self.assertEqual(res.data["monthly_signups"][-1]["month_year"], today.strftime("%b %Y"))
        self.assertEqual(res.data["monthly_signups"][-1]["signups"], 3)

    def test_member_stats_require_login(self):
        res = APIClient().get(reverse("reports-member-stats"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
