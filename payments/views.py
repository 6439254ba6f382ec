# payments/views.py
from rest_framework import generics, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsGymAdmin
from membership.exceptions import NotFound
from membership.models import Member
from membership.stores import DjangoStore
from . import workflow
from .models import Payment, PaymentStatus
from .serializers import (
    PaymentCreateSerializer,
    PaymentSerializer,
    PendingPaymentSerializer,
    PublicPaymentSerializer,
    RejectPaymentSerializer,
)

ADMIN_ACTIONS = {"list", "retrieve", "pending", "verify", "reject"}


class PaymentViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Membership payments. Created by staff at the desk or submitted from the
    public payment page, verified or rejected by an admin. Never edited or
    deleted afterwards.
    """

    # prefetch, not select: a deleted plan must not drop its payments from the list
    queryset = Payment.objects.select_related("member").prefetch_related("plan")
    serializer_class = PaymentSerializer
    filterset_fields = ["status", "member"]
    lookup_value_regex = r"\d+"
    store = DjangoStore()

    def get_permissions(self):
        if self.action == "submit":
            return [AllowAny()]
        if self.action in ADMIN_ACTIONS:
            return [IsGymAdmin()]
        return [IsAuthenticated()]

    def _render(self, payment):
        return PaymentSerializer(self.get_queryset().get(pk=payment.pk)).data

    def create(self, request, *args, **kwargs):
        """
        Record a payment. Omitting ``status`` records it as verified, which
        activates the membership right away.
        """
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        verified_by = data.pop("verified_by", None)
        data["verified_by_id"] = verified_by.pk if verified_by else request.user.pk
        payment = workflow.create_payment(self.store, data)
        return Response(self._render(payment), status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"])
    def pending(self, request):
        payments = self.filter_queryset(self.get_queryset()).filter(status=PaymentStatus.PENDING)
        return Response(PaymentSerializer(payments, many=True).data)

    @action(detail=False, methods=["get"], url_path=r"member/(?P<member_id>\d+)", url_name="member")
    def for_member(self, request, member_id=None):
        if not Member.objects.filter(pk=member_id).exists():
            raise NotFound("Member", member_id)
        payments = self.get_queryset().filter(member_id=member_id)
        return Response(PaymentSerializer(payments, many=True).data)

    @action(detail=True, methods=["post"])
    def verify(self, request, pk=None):
        payment = workflow.verify_payment(self.store, int(pk), request.user.pk)
        return Response(self._render(payment))

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        serializer = RejectPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notes = serializer.validated_data.get("notes") or None
        payment = workflow.reject_payment(self.store, int(pk), request.user.pk, notes=notes)
        return Response(self._render(payment))

    @action(detail=False, methods=["post"])
    def submit(self, request):
        """Public: a member reports a payment made outside the desk (e.g. Yape)."""
        serializer = PublicPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = workflow.submit_public_payment(self.store, serializer.validated_data)
        return Response(
            {
                "success": True,
                "message": "Your payment is pending verification.",
                "reference_number": result["reference_number"],
                "payment_id": result["payment"].id,
            },
            status=status.HTTP_201_CREATED,
        )


class MemberPendingPaymentsView(generics.ListAPIView):
    """
    Public: pending payments of the member with the given ``?email=``, or of
    the logged-in user's email when none is given. Unknown emails get an
    empty list.
    """

    permission_classes = [AllowAny]
    serializer_class = PendingPaymentSerializer
    filter_backends = []

    def get_queryset(self):
        email = self.request.query_params.get("email")
        if not email and self.request.user.is_authenticated:
            email = self.request.user.email
        member = DjangoStore().get_member_by_email(email) if email else None
        if member is None:
            return Payment.objects.none()
        return Payment.objects.prefetch_related("plan").filter(member=member, status=PaymentStatus.PENDING)
