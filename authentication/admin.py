from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser, Seller, UserRole


class UserRoleInline(admin.TabularInline):
    model = UserRole
    extra = 0
    readonly_fields = ("created_at",)


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("email", "username", "name", "is_active", "is_staff", "date_joined")
    search_fields = ("email", "username", "name")
    ordering = ("email",)
    fieldsets = UserAdmin.fieldsets + (("Marketplace", {"fields": ("name",)}),)
    inlines = [UserRoleInline]


@admin.register(Seller)
class SellerAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_email", "created_at")
    search_fields = ("name", "contact_email")
