from django.contrib import admin

from .models import BarGame, GameSession


@admin.register(BarGame)
class BarGameAdmin(admin.ModelAdmin):
    list_display = ("name", "price_per_hour", "available")
    list_filter = ("available",)
    search_fields = ("name",)


@admin.register(GameSession)
class GameSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "game", "customer", "start_time", "end_time", "cost")
    list_filter = ("game",)
    search_fields = ("customer__name", "game__name")
    readonly_fields = ("end_time", "cost")
    list_select_related = ("game", "customer")
