from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import Activity
from .serializers import ActivitySerializer, ActivityCreateSerializer

RECENT_DEFAULT = 10
RECENT_MAX = 100


class ActivityViewSet(mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    """Audit log. Entries can be appended from the front-end but never edited."""

    queryset = Activity.objects.select_related("member", "user")
    filterset_fields = ["activity_type", "member", "user"]

    def get_serializer_class(self):
        if self.action == "create":
            return ActivityCreateSerializer
        return ActivitySerializer

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    @action(detail=False, methods=["get"])
    def recent(self, request):
        try:
            limit = int(request.query_params.get("limit", RECENT_DEFAULT))
        except ValueError:
            limit = RECENT_DEFAULT
        limit = max(1, min(limit, RECENT_MAX))
        activities = self.filter_queryset(self.get_queryset())[:limit]
        return Response(ActivitySerializer(activities, many=True).data)
