from django.contrib import admin
from .models import Payment


# ============================================================
# Payment Admin (read-only: verify/reject through the API)
# ============================================================
@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "member", "plan_id", "amount", "payment_method", "status", "payment_date", "verified_by")
    list_filter = ("status", "payment_method")
    search_fields = ("member__email", "member__first_name", "member__last_name", "notes")
    readonly_fields = ("status", "verified_by", "verified_at")
    ordering = ("-payment_date",)

    def has_delete_permission(self, request, obj=None):
        return False
