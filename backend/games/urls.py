from rest_framework import routers

from .views import BarGameViewSet, GameSessionViewSet

app_name = "games"

router = routers.SimpleRouter(trailing_slash=False)
# Sessions first so their prefix is never read as a game id
router.register(r"bar-games/game-sessions", GameSessionViewSet, basename="game-session")
router.register(r"bar-games", BarGameViewSet, basename="bar-game")

urlpatterns = router.urls
