from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import MemberPendingPaymentsView, PaymentViewSet

router = DefaultRouter()
router.register(r"payments", PaymentViewSet, basename="payments")

urlpatterns = [
    path("user/pending-payments/", MemberPendingPaymentsView.as_view(), name="user-pending-payments"),
]
urlpatterns += router.urls
