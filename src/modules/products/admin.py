from django.contrib import admin

from modules.products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["id", "type", "name", "price", "updated_at"]
    list_filter = ["type"]
    search_fields = ["name", "description"]
    ordering = ["id"]
    readonly_fields = ["created_at", "updated_at"]
