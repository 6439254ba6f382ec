import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsGymAdminOrReadOnly
from . import ledger, reports
from .models import Member, MembershipPlan
from .serializers import (
    MemberCreateSerializer,
    MemberDetailSerializer,
    MemberSerializer,
    MembershipPlanSerializer,
)
from .stores import DjangoStore

logger = logging.getLogger(__name__)


class MembershipPlanViewSet(viewsets.ModelViewSet):
    queryset = MembershipPlan.objects.all()
    serializer_class = MembershipPlanSerializer
    permission_classes = [IsGymAdminOrReadOnly]
    filterset_fields = ["is_active", "duration_type"]

    @action(detail=False, methods=["get"], permission_classes=[AllowAny])
    def public(self, request):
        """Plans shown on the public payment page."""
        plans = MembershipPlan.objects.filter(is_active=True)
        return Response(MembershipPlanSerializer(plans, many=True).data)


class MemberViewSet(viewsets.ModelViewSet):
    """
    Gym members. Listing runs the expiry sweep first, so the statuses returned
    are never stale. Edits go through the membership ledger.
    """

    queryset = Member.objects.select_related("plan")
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status", "plan"]
    store = DjangoStore()

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action == "retrieve":
            qs = qs.prefetch_related("payments", "activities")
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return MemberDetailSerializer
        if self.action == "create":
            return MemberCreateSerializer
        return MemberSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(ledger.list_members(self.store))
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(self.get_serializer(queryset, many=True).data)

    def perform_create(self, serializer):
        fields = dict(serializer.validated_data)
        if "plan" in fields:
            plan = fields.pop("plan")
            fields["plan_id"] = plan.pk if plan else None
        member = ledger.register_member(self.store, **fields)
        serializer.instance = member
        self.store.log_activity(
            "member_created",
            f"New member added: {member.full_name}",
            member_id=member.id,
            user_id=self.request.user.id,
        )

    def perform_update(self, serializer):
        fields = dict(serializer.validated_data)
        if "plan" in fields:
            plan = fields.pop("plan")
            fields["plan_id"] = plan.pk if plan else None
        member = ledger.update_member(self.store, serializer.instance.pk, **fields)
        serializer.instance = member
        self.store.log_activity(
            "member_updated",
            f"Member updated: {member.full_name}",
            member_id=member.id,
            user_id=self.request.user.id,
        )

    def perform_destroy(self, instance):
        name = instance.full_name
        # Members with payments are protected; the exception handler answers 409
        instance.delete()
        self.store.log_activity("member_deleted", f"Member deleted: {name}", user_id=self.request.user.id)
        logger.info("Member %s deleted by user %s", name, self.request.user.id)


class ReportViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    store = DjangoStore()

    @action(detail=False, methods=["get"], url_path="member-stats")
    def member_stats(self, request):
        return Response(reports.member_stats(self.store))
