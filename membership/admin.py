from django.contrib import admin
from .models import Member, MembershipPlan

@admin.register(MembershipPlan)
class MembershipPlanAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "duration", "duration_type", "is_active")
    list_filter = ("is_active", "duration_type")

@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("email", "first_name", "last_name", "plan", "status", "join_date", "expiry_date")
    list_filter = ("status", "plan")
    search_fields = ("email", "first_name", "last_name", "phone")
    # Status and expiry belong to the ledger; edit them through the API
    readonly_fields = ("status", "expiry_date")
