from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsGymAdmin(BasePermission):
    """Payment verification, plan edits and the payment ledger are admin-only."""

    message = "Administrator role required."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, "is_gym_admin", False))


class IsGymAdminOrReadOnly(IsGymAdmin):
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)
