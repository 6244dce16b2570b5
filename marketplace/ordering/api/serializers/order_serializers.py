from rest_framework import serializers

from marketplace.ordering.domain.models.order import Order


class OrderSerializer(serializers.ModelSerializer):
    client_id = serializers.UUIDField(read_only=True)
    client_name = serializers.SerializerMethodField()
    product_id = serializers.UUIDField(read_only=True)
    product_title = serializers.CharField(source="product.title", read_only=True)
    product_price = serializers.DecimalField(source="product.price", max_digits=10, decimal_places=2, read_only=True)
    seller_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "client_id",
            "client_name",
            "product_id",
            "product_title",
            "product_price",
            "seller_id",
            "quantity",
            "status",
            "shipping_address",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_client_name(self, obj) -> str:
        return obj.client.get_display_name()


class CheckoutRequestSerializer(serializers.Serializer):
    shipping_address = serializers.CharField(allow_blank=True)


class BuyNowRequestSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)
    shipping_address = serializers.CharField(allow_blank=True)


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)
