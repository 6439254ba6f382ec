"""
Record store used by the membership ledger and the payment workflow.

``DjangoStore`` is what the API runs on. ``InMemoryStore`` keeps the same
contract in plain dicts; ``seed_gym --dry-run`` uses it to preview demo data
and the core rules are unit-tested against it without a database.

Both return objects exposing the model attribute names (``member.expiry_date``,
``payment.plan_id``, ...), which is all the ledger and workflow rely on.
"""
import copy
import itertools
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from activities.utils import record_activity
from payments.models import Payment

from .models import Member, MemberStatus, MembershipPlan


class MembershipStore(ABC):
    @abstractmethod
    def atomic(self):
        """Context manager: everything inside commits or rolls back together."""

    # Plans
    @abstractmethod
    def get_plan(self, plan_id): ...

    @abstractmethod
    def list_plans(self): ...

    # Members
    @abstractmethod
    def get_member(self, member_id): ...

    @abstractmethod
    def get_member_by_email(self, email): ...

    @abstractmethod
    def list_members(self): ...

    @abstractmethod
    def create_member(self, **fields): ...

    @abstractmethod
    def update_member(self, member_id, **fields):
        """Merge ``fields`` into the member; None if it does not exist."""

    @abstractmethod
    def members_expiring_before(self, day): ...

    @abstractmethod
    def expire_member(self, member_id) -> bool:
        """Flip an active member to expired. False if it was no longer active."""

    # Payments
    @abstractmethod
    def get_payment(self, payment_id): ...

    @abstractmethod
    def create_payment(self, **fields): ...

    @abstractmethod
    def claim_payment(self, payment_id, expected_status, **fields):
        """Apply ``fields`` only if the payment is still in ``expected_status``; None otherwise."""

    # Staff & audit
    @abstractmethod
    def get_user(self, user_id): ...

    @abstractmethod
    def log_activity(self, activity_type, description, member_id=None, user_id=None): ...


class DjangoStore(MembershipStore):
    def atomic(self):
        return transaction.atomic()

    def get_plan(self, plan_id):
        return MembershipPlan.objects.filter(pk=plan_id).first()

    def list_plans(self):
        return list(MembershipPlan.objects.all())

    def get_member(self, member_id):
        return Member.objects.select_related("plan").filter(pk=member_id).first()

    def get_member_by_email(self, email):
        return Member.objects.filter(email__iexact=email).first()

    def list_members(self):
        return Member.objects.select_related("plan").order_by("id")

    def create_member(self, **fields):
        return Member.objects.create(**fields)

    def update_member(self, member_id, **fields):
        member = Member.objects.filter(pk=member_id).first()
        if member is None:
            return None
        if fields:
            for name, value in fields.items():
                setattr(member, name, value)
            member.save(update_fields=list(fields))
        return member

    def members_expiring_before(self, day):
        return list(
            Member.objects.filter(status=MemberStatus.ACTIVE, expiry_date__isnull=False, expiry_date__lt=day)
        )

    def expire_member(self, member_id):
        updated = Member.objects.filter(pk=member_id, status=MemberStatus.ACTIVE).update(status=MemberStatus.EXPIRED)
        return updated == 1

    def get_payment(self, payment_id):
        return Payment.objects.filter(pk=payment_id).first()

    def create_payment(self, **fields):
        return Payment.objects.create(**fields)

    def claim_payment(self, payment_id, expected_status, **fields):
        updated = Payment.objects.filter(pk=payment_id, status=expected_status).update(**fields)
        if not updated:
            return None
        return Payment.objects.get(pk=payment_id)

    def get_user(self, user_id):
        return get_user_model().objects.filter(pk=user_id).first()

    def log_activity(self, activity_type, description, member_id=None, user_id=None):
        return record_activity(activity_type, description, member_id=member_id, user_id=user_id)


# ------------------------------------------------------------
# In-memory records
# ------------------------------------------------------------

@dataclass
class PlanRecord:
    id: int
    name: str
    price: int
    duration: int = 1
    duration_type: str = "monthly"
    description: str = ""
    features: list = field(default_factory=list)
    is_active: bool = True


@dataclass
class MemberRecord:
    id: int
    first_name: str
    last_name: str
    email: str
    status: str = MemberStatus.PENDING
    expiry_date: Optional[date] = None
    plan_id: Optional[int] = None
    phone: str = ""
    address: str = ""
    join_date: Optional[date] = None
    notes: str = ""

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def status_kind(self):
        return MemberStatus.parse(self.status)


@dataclass
class PaymentRecord:
    id: int
    member_id: int
    plan_id: int
    amount: int
    payment_method: str
    payment_date: datetime
    status: str = "pending"
    receipt_url: Optional[str] = None
    notes: str = ""
    verified_by_id: Optional[int] = None
    verified_at: Optional[datetime] = None


@dataclass
class ActivityRecord:
    id: int
    activity_type: str
    description: str
    timestamp: datetime
    member_id: Optional[int] = None
    user_id: Optional[int] = None


@dataclass
class UserRecord:
    id: int
    email: str
    name: str = ""
    role: str = "admin"


class InMemoryStore(MembershipStore):
    def __init__(self):
        self.plans = {}
        self.members = {}
        self.payments = {}
        self.users = {}
        self.activities = []
        self._ids = itertools.count(1)

    def _next_id(self):
        return next(self._ids)

    @contextmanager
    def atomic(self):
        snapshot = copy.deepcopy((self.plans, self.members, self.payments, self.users, self.activities))
        try:
            yield
        except BaseException:
            self.plans, self.members, self.payments, self.users, self.activities = snapshot
            raise

    # Seeding helpers (not part of the store contract)
    def add_plan(self, **fields):
        plan = PlanRecord(id=self._next_id(), **fields)
        self.plans[plan.id] = plan
        return plan

    def add_user(self, **fields):
        user = UserRecord(id=self._next_id(), **fields)
        self.users[user.id] = user
        return user

    def activities_of_type(self, activity_type):
        return [a for a in self.activities if a.activity_type == activity_type]

    # Contract
    def get_plan(self, plan_id):
        return self.plans.get(plan_id)

    def list_plans(self):
        return sorted(self.plans.values(), key=lambda p: (p.price, p.id))

    def get_member(self, member_id):
        return self.members.get(member_id)

    def get_member_by_email(self, email):
        email = (email or "").lower()
        return next((m for m in self.members.values() if m.email.lower() == email), None)

    def list_members(self):
        return sorted(self.members.values(), key=lambda m: m.id)

    def create_member(self, **fields):
        member = MemberRecord(id=self._next_id(), **fields)
        self.members[member.id] = member
        return member

    def update_member(self, member_id, **fields):
        member = self.members.get(member_id)
        if member is None:
            return None
        for name, value in fields.items():
            setattr(member, name, value)
        return member

    def members_expiring_before(self, day):
        return [
            m for m in self.list_members()
            if m.status_kind is MemberStatus.ACTIVE and m.expiry_date is not None and m.expiry_date < day
        ]

    def expire_member(self, member_id):
        member = self.members.get(member_id)
        if member is None or member.status != MemberStatus.ACTIVE:
            return False
        member.status = MemberStatus.EXPIRED
        return True

    def get_payment(self, payment_id):
        return self.payments.get(payment_id)

    def create_payment(self, **fields):
        payment = PaymentRecord(id=self._next_id(), **fields)
        self.payments[payment.id] = payment
        return payment

    def claim_payment(self, payment_id, expected_status, **fields):
        payment = self.payments.get(payment_id)
        if payment is None or payment.status != expected_status:
            return None
        for name, value in fields.items():
            setattr(payment, name, value)
        return payment

    def get_user(self, user_id):
        return self.users.get(user_id)

    def log_activity(self, activity_type, description, member_id=None, user_id=None):
        activity = ActivityRecord(
            id=self._next_id(),
            activity_type=activity_type,
            description=description,
            timestamp=timezone.now(),
            member_id=member_id,
            user_id=user_id,
        )
        self.activities.append(activity)
        return activity
