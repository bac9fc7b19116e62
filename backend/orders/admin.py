from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("item_type", "cafe_item", "game_session", "quantity", "price_at_sale", "cost_at_sale", "get_line_item_total")
    fields = readonly_fields
    can_delete = False

    def get_line_item_total(self, obj):
        return f"${obj.contribution:,.2f}"

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Orders are built and paid through the API so their totals stay in step
    with their lines; the admin only reads them.
    """

    list_display = ("id", "customer", "total_amount", "payment_status", "paid_at", "created_at")
    list_filter = ("payment_status",)
    search_fields = ("id", "customer__name")
    list_select_related = ("customer",)
    readonly_fields = ("customer", "total_amount", "payment_status", "paid_at", "created_at", "updated_at")
    inlines = [OrderItemInline]
