from django.contrib import admin
from .models import Activity

@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "activity_type", "description", "member", "user")
    list_filter = ("activity_type",)
    search_fields = ("description", "member__email", "member__last_name")
    readonly_fields = ("activity_type", "description", "timestamp", "member", "user")

    def has_change_permission(self, request, obj=None):
        return False
