from django.contrib import admin

from .models import CafeItem


@admin.register(CafeItem)
class CafeItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "quantity", "in_stock")
    list_filter = ("category", "in_stock")
    search_fields = ("name", "category")
    readonly_fields = ("in_stock",)
