from rest_framework import serializers

from marketplace.finance.domain.models.finance import Payment, StorageCost


class PaymentSerializer(serializers.ModelSerializer):
    order_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Payment
        fields = ["id", "order_id", "amount", "cost", "margin", "payment_date", "created_at"]
        read_only_fields = fields


class StorageCostSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    product_title = serializers.CharField(source="product.title", read_only=True)

    class Meta:
        model = StorageCost
        fields = ["id", "product_id", "product_title", "cost_amount", "month", "year", "created_at"]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    cost = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, default=0)
    payment_date = serializers.DateTimeField(required=False)


class StorageCostCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    cost_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=1)


class StorageCostUpdateSerializer(serializers.Serializer):
    cost_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    year = serializers.IntegerField(min_value=1, required=False)
