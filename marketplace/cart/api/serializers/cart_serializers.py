from rest_framework import serializers

from marketplace.catalog.api.serializers.product_serializers import ProductListSerializer


class CartLineSerializer(serializers.Serializer):
    product = ProductListSerializer(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


class CartServiceOutputSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True, read_only=True)
    items_count = serializers.IntegerField(read_only=True)
    total_items = serializers.IntegerField(read_only=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


class AddToCartRequestSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartRequestSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(help_text="New quantity; zero or less removes the item")


class RemoveFromCartRequestSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()


class RestoreCartRequestSerializer(serializers.Serializer):
    items = serializers.JSONField(help_text="Saved cart entries: [{product_id, quantity}]")
