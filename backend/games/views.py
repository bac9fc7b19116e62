from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from .models import BarGame, GameSession
from .serializers import (
    BarGameSerializer,
    CheckInSerializer,
    GameSessionSerializer,
    GameSessionUpdateSerializer,
)
from .services import SessionTracker


class BarGameViewSet(BaseViewSet):
    """
    CRUD for rentable games, plus check-in.
    """

    queryset = BarGame.objects.all()
    serializer_class = BarGameSerializer
    filterset_fields = ["available"]
    search_fields = ["name"]
    ordering = ["name"]
    resource_name = "Bar game"

    @property
    def failure_messages(self):
        messages = super().failure_messages
        messages["check_in"] = "Failed to check in to game"
        return messages

    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):
        serializer = CheckInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session = SessionTracker().check_in(pk, serializer.validated_data["customerId"])
        return Response(GameSessionSerializer(session).data, status=status.HTTP_201_CREATED)


class GameSessionViewSet(BaseViewSet):
    """
    Session listings, checkout and administrative edits. Sessions are only
    opened through BarGameViewSet.check_in.
    """

    queryset = GameSession.objects.all()
    serializer_class = GameSessionSerializer
    filterset_fields = ["game", "customer"]
    ordering = ["-start_time"]
    http_method_names = ["get", "put", "delete", "head", "options"]
    resource_name = "Game session"

    @property
    def failure_messages(self):
        messages = super().failure_messages
        messages.update(
            {
                "active": "Failed to fetch active game sessions",
                "past": "Failed to fetch past game sessions",
                "check_out": "Failed to check out of game",
            }
        )
        return messages

    def update(self, request, *args, **kwargs):
        serializer = GameSessionUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session = SessionTracker().update_session(kwargs["pk"], **serializer.to_changes())
        return Response(GameSessionSerializer(session).data)

    def perform_destroy(self, instance):
        SessionTracker().delete_session(instance.pk)

    @action(detail=False, methods=["get"])
    def active(self, request):
        sessions = SessionTracker().active_sessions()
        return Response(GameSessionSerializer(sessions, many=True).data)

    @action(detail=False, methods=["get"])
    def past(self, request):
        sessions = SessionTracker().past_sessions()
        return Response(GameSessionSerializer(sessions, many=True).data)

    @action(detail=True, methods=["put"], url_path="check-out")
    def check_out(self, request, pk=None):
        session = SessionTracker().check_out(pk)
        return Response(GameSessionSerializer(session).data)
