"""
Customer admin interface.
"""
from django.contrib import admin

from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "membership", "created_at")
    list_filter = ("membership",)
    search_fields = ("name", "email", "phone")
    list_select_related = ("membership",)
    readonly_fields = ("created_at", "updated_at")
