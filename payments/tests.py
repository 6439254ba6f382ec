# payments/tests.py
from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from activities.models import Activity
from membership.models import Member, MemberStatus, MembershipPlan
from .models import Payment, PaymentStatus

User = get_user_model()


class BaseTestCase(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@example.com", password="testpass123", name="Gym Admin", role=User.Role.ADMIN
        )
        self.staff = User.objects.create_user(email="desk@example.com", password="testpass123")
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

        self.plan = MembershipPlan.objects.create(name="Monthly", price=7000, duration=1, duration_type="monthly")
        self.member = Member.objects.create(first_name="Sarah", last_name="Williams", email="sarah@example.com")

    def make_pending(self, **extra):
        fields = dict(
            member=self.member, plan=self.plan, amount=7000, payment_method="yape", status=PaymentStatus.PENDING
        )
        fields.update(extra)
        return Payment.objects.create(**fields)


class CreatePaymentTests(BaseTestCase):
    def test_create_defaults_to_verified(self):
        payload = {"member_id": self.member.id, "plan_id": self.plan.id, "amount": 7000, "payment_method": "cash"}
        res = self.client.post(reverse("payments-list"), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "verified")
        self.assertEqual(res.data["verified_by"], self.admin.id)
        self.assertEqual(res.data["member_name"], "Sarah Williams")
        self.assertEqual(res.data["plan_name"], "Monthly")
        self.member.refresh_from_db()
        self.assertEqual(self.member.status, MemberStatus.ACTIVE)
        self.assertIsNotNone(self.member.expiry_date)

    def test_staff_can_record_pending_payment(self):
        self.client.force_authenticate(user=self.staff)
        payload = {
            "member_id": self.member.id,
            "plan_id": self.plan.id,
            "amount": 7000,
            "payment_method": "transfer",
            "status": "pending",
        }
        res = self.client.post(reverse("payments-list"), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "pending")
        self.assertIsNone(res.data["verified_by"])

    def test_missing_fields_is_bad_request(self):
        res = self.client.post(reverse("payments-list"), {"member_id": self.member.id}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("plan_id", res.data)
        self.assertFalse(Payment.objects.exists())

    def test_unknown_member_is_not_found(self):
        payload = {"member_id": 9999, "plan_id": self.plan.id, "amount": 7000, "payment_method": "cash"}
        res = self.client.post(reverse("payments-list"), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["detail"], "Member 9999 not found.")


class PaymentListTests(BaseTestCase):
    def test_list_is_admin_only(self):
        self.client.force_authenticate(user=self.staff)
        res = self.client.get(reverse("payments-list"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_pending_list(self):
        pending = self.make_pending()
        self.make_pending(status=PaymentStatus.VERIFIED)

        res = self.client.get(reverse("payments-pending"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual([p["id"] for p in res.data], [pending.id])

    def test_filter_by_status(self):
        self.make_pending()
        rejected = self.make_pending(status=PaymentStatus.REJECTED)

        res = self.client.get(reverse("payments-list"), {"status": "rejected"})

        self.assertEqual([p["id"] for p in res.data], [rejected.id])

    def test_payments_of_member(self):
        other = Member.objects.create(first_name="Luis", last_name="Quispe", email="luis@example.com")
        mine = self.make_pending()
        self.make_pending(member=other)

        res = self.client.get(reverse("payments-member", args=[self.member.id]))

        self.assertEqual(res.status_code, 200)
        self.assertEqual([p["id"] for p in res.data], [mine.id])

        res = self.client.get(reverse("payments-member", args=[9999]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_deleted_plan_shows_unknown_plan(self):
        payment = self.make_pending()
        self.plan.delete()

        res = self.client.get(reverse("payments-list"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data[0]["id"], payment.id)
        self.assertEqual(res.data[0]["plan_name"], "Unknown plan")


class VerifyRejectTests(BaseTestCase):
    def test_verify(self):
        payment = self.make_pending()

        res = self.client.post(reverse("payments-verify", args=[payment.id]))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "verified")
        self.member.refresh_from_db()
        self.assertEqual(self.member.status, MemberStatus.ACTIVE)
        self.assertEqual(self.member.plan_id, self.plan.id)

    def test_verify_twice_conflicts(self):
        payment = self.make_pending()
        self.client.post(reverse("payments-verify", args=[payment.id]))
        self.member.refresh_from_db()
        first_expiry = self.member.expiry_date

        res = self.client.post(reverse("payments-verify", args=[payment.id]))

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.member.refresh_from_db()
        self.assertEqual(self.member.expiry_date, first_expiry)

    def test_verify_missing_payment(self):
        res = self.client.post(reverse("payments-verify", args=[4242]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_verify_requires_admin(self):
        payment = self.make_pending()
        self.client.force_authenticate(user=self.staff)

        res = self.client.post(reverse("payments-verify", args=[payment.id]))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Payment.objects.get(pk=payment.pk).status, PaymentStatus.PENDING)

    def test_reject_with_notes(self):
        payment = self.make_pending()

        res = self.client.post(reverse("payments-reject", args=[payment.id]), {"notes": "Wrong amount"}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "rejected")
        self.assertEqual(res.data["notes"], "Wrong amount")
        self.member.refresh_from_db()
        self.assertEqual(self.member.status, MemberStatus.PENDING)

    def test_reject_verified_conflicts(self):
        payment = self.make_pending(status=PaymentStatus.VERIFIED, verified_at=timezone.now())
        res = self.client.post(reverse("payments-reject", args=[payment.id]))
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_reject_missing_payment(self):
        res = self.client.post(reverse("payments-reject", args=[4242]), {"notes": "Duplicate"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Activity.objects.filter(activity_type="payment_rejected").exists())


class PublicSubmitTests(BaseTestCase):
    def test_submit_without_login(self):
        client = APIClient()
        payload = {
            "name": "Ana Flores",
            "email": "ana@example.com",
            "phone": "912345678",
            "plan_id": self.plan.id,
            "receipt_url": "https://receipts.example.com/ana.png",
        }
        res = client.post(reverse("payments-submit"), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertTrue(res.data["reference_number"].startswith("YAPE"))
        payment = Payment.objects.get(pk=res.data["payment_id"])
        self.assertEqual(payment.status, PaymentStatus.PENDING)
        self.assertEqual(payment.member.email, "ana@example.com")
        self.assertTrue(Activity.objects.filter(activity_type="payment_submitted").exists())

    def test_submit_unknown_plan(self):
        res = APIClient().post(
            reverse("payments-submit"), {"email": "ana@example.com", "plan_id": 9999}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)


class MemberPendingPaymentsTests(BaseTestCase):
    def test_lookup_by_email_without_login(self):
        pending = self.make_pending(notes="Staff only")
        self.make_pending(status=PaymentStatus.VERIFIED)
        other = Member.objects.create(first_name="Luis", last_name="Quispe", email="luis@example.com")
        self.make_pending(member=other)

        res = APIClient().get(reverse("user-pending-payments"), {"email": "SARAH@example.com"})

        self.assertEqual(res.status_code, 200)
        self.assertEqual([p["id"] for p in res.data], [pending.id])
        self.assertEqual(res.data[0]["plan_name"], "Monthly")
        self.assertNotIn("notes", res.data[0])

    def test_logged_in_user_defaults_to_own_email(self):
        mine = self.make_pending(member=Member.objects.create(
            first_name="Gym", last_name="Admin", email="admin@example.com"
        ))
        self.make_pending()

        res = self.client.get(reverse("user-pending-payments"))

        self.assertEqual([p["id"] for p in res.data], [mine.id])

    def test_unknown_email_is_empty(self):
        self.make_pending()

        res = APIClient().get(reverse("user-pending-payments"), {"email": "nobody@example.com"})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, [])
