from rest_framework.routers import DefaultRouter
from .views import MemberViewSet, MembershipPlanViewSet, ReportViewSet

router = DefaultRouter()
router.register(r"membership-plans", MembershipPlanViewSet, basename="membership-plans")
router.register(r"members", MemberViewSet, basename="members")
router.register(r"reports", ReportViewSet, basename="reports")

urlpatterns = router.urls
