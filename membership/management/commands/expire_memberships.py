from django.core.management.base import BaseCommand

from membership import ledger
from membership.stores import DjangoStore


class Command(BaseCommand):
    help = "Expire active memberships whose expiry date has passed (the member list does this too)"

    def handle(self, *args, **options):
        expired = ledger.sweep_expired_members(DjangoStore())
        for member in expired:
            self.stdout.write(f"Expired: {member.full_name} ({member.expiry_date})")
        self.stdout.write(self.style.SUCCESS(f"{len(expired)} membership(s) expired"))
