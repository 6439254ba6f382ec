from django.core.management.base import BaseCommand

from membership import ledger
from membership.models import MembershipPlan
from membership.stores import DjangoStore, InMemoryStore
from payments import workflow
from payments.models import PaymentStatus

PLANS = [
    {
        "name": "Daily",
        "description": "Gym access for 1 day",
        "price": 600,
        "duration": 1,
        "duration_type": "daily",
        "features": ["Gym access", "Lockers"],
    },
    {
        "name": "Weekly",
        "description": "Gym access for 1 week",
        "price": 3000,
        "duration": 1,
        "duration_type": "weekly",
        "features": ["Gym access", "Lockers", "Basic classes"],
    },
    {
        "name": "Monthly",
        "description": "Gym access for 1 month",
        "price": 7000,
        "duration": 1,
        "duration_type": "monthly",
        "features": ["Gym access", "Lockers", "All classes", "1 personal training session"],
    },
    {
        "name": "Quarterly",
        "description": "Gym access for 3 months",
        "price": 18000,
        "duration": 3,
        "duration_type": "monthly",
        "features": ["Gym access", "Lockers", "All classes", "3 personal training sessions"],
    },
    {
        "name": "Yearly",
        "description": "Gym access for 1 year",
        "price": 65000,
        "duration": 1,
        "duration_type": "yearly",
        "features": ["24/7 gym access", "Lockers", "All classes", "12 personal training sessions", "Nutrition plan"],
    },
]

# first name, last name, email, plan index, payment status
MEMBERS = [
    ("Sarah", "Williams", "sarah.williams@example.com", 2, PaymentStatus.VERIFIED),
    ("Marcus", "Johnson", "marcus.johnson@example.com", 3, PaymentStatus.VERIFIED),
    ("Emma", "Garcia", "emma.garcia@example.com", 4, PaymentStatus.VERIFIED),
    ("Luis", "Quispe", "luis.quispe@example.com", 1, PaymentStatus.PENDING),
    ("Ana", "Flores", "ana.flores@example.com", 2, PaymentStatus.PENDING),
]


class Command(BaseCommand):
    help = "Seed demo plans, members and payments (safe to re-run)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Build the demo data in memory and print it without touching the database",
        )

    def handle(self, *args, **options):
        if options["dry_run"]:
            store = InMemoryStore()
            plans = [store.add_plan(**plan) for plan in PLANS]
        else:
            store = DjangoStore()
            plans = [
                MembershipPlan.objects.get_or_create(name=plan["name"], defaults=plan)[0]
                for plan in PLANS
            ]

        created = 0
        for first_name, last_name, email, plan_index, status in MEMBERS:
            if store.get_member_by_email(email):
                continue
            plan = plans[plan_index]
            member = ledger.register_member(store, first_name=first_name, last_name=last_name, email=email)
            workflow.create_payment(
                store,
                {
                    "member_id": member.id,
                    "plan_id": plan.id,
                    "amount": plan.price,
                    "payment_method": "cash",
                    "status": status,
                },
            )
            created += 1

        if options["dry_run"]:
            for member in store.list_members():
                self.stdout.write(f"{member.full_name}: {member.status} until {member.expiry_date}")

        self.stdout.write(self.style.SUCCESS(f"Demo data ensured ({len(plans)} plans, {created} new members)"))
