from django.contrib import admin

from .models import Cart, CartItem, Order, Payment, Product, StorageCost


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ("product", "quantity", "added_at")
    readonly_fields = ("added_at",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("title", "seller", "price", "created_at")
    list_filter = ("created_at",)
    search_fields = ("title", "description", "seller__email")
    readonly_fields = ("id", "created_at", "updated_at")

    fieldsets = (
        (None, {"fields": ("id", "title", "description", "seller")}),
        ("Pricing", {"fields": ("price",)}),
        ("Catalog", {"fields": ("keywords", "image_url")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("user", "created_at", "updated_at")
    search_fields = ("user__email",)
    inlines = [CartItemInline]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "client", "product", "seller", "quantity", "status", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("client__email", "seller__email", "product__title")
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("order", "amount", "cost", "margin", "payment_date")
    list_filter = ("payment_date",)
    readonly_fields = ("margin", "created_at")


@admin.register(StorageCost)
class StorageCostAdmin(admin.ModelAdmin):
    list_display = ("product", "cost_amount", "month", "year")
    list_filter = ("year", "month")
