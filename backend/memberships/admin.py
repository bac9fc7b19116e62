from django.contrib import admin

from .models import Membership


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ("name", "duration", "price", "active", "expiry_date")
    list_filter = ("active",)
    search_fields = ("name",)
