"""
Dashboard serializers.

The admin dashboard serializers only document the response for OpenAPI; the
view returns the aggregated dicts as they are.
"""

from rest_framework import serializers

from marketplace.ordering.api.serializers import OrderSerializer


MONEY = {"max_digits": 14, "decimal_places": 2}


class ClientDashboardSerializer(serializers.Serializer):
    orders = OrderSerializer(many=True, read_only=True)
    total_orders = serializers.IntegerField()
    status_counts = serializers.DictField(child=serializers.IntegerField())
    total_quantity = serializers.IntegerField()


class SellerDashboardSerializer(serializers.Serializer):
    total_products = serializers.IntegerField()
    pending_orders = serializers.IntegerField()
    monthly_revenue = serializers.DecimalField(**MONEY)
    monthly_storage_costs = serializers.DecimalField(**MONEY)
    total_margin = serializers.DecimalField(**MONEY)
    net_profit = serializers.DecimalField(**MONEY)
    total_payments = serializers.IntegerField()


# ===== Admin dashboard (documentation only) =====


class ProductOrdersSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    product_title = serializers.CharField()
    order_count = serializers.IntegerField()
    total_value = serializers.DecimalField(**MONEY)


class ClientOrdersSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    client_name = serializers.CharField()
    order_count = serializers.IntegerField()
    total_value = serializers.DecimalField(**MONEY)


class OrderAnalyticsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    daily_orders = serializers.IntegerField()
    monthly_orders = serializers.IntegerField()
    yearly_orders = serializers.IntegerField()
    status_breakdown = serializers.DictField(child=serializers.IntegerField())
    total_order_value = serializers.DecimalField(**MONEY)
    orders_per_product = ProductOrdersSerializer(many=True)
    orders_per_client = ClientOrdersSerializer(many=True)


class BestSellingProductSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    title = serializers.CharField()
    total_sold = serializers.IntegerField()
    revenue = serializers.DecimalField(**MONEY)


class ProductAnalyticsSerializer(serializers.Serializer):
    total_products = serializers.IntegerField()
    best_selling_products = BestSellingProductSerializer(many=True)
    total_value_sold = serializers.DecimalField(**MONEY)
    average_order_value = serializers.DecimalField(**MONEY)


class SellerOrdersSerializer(serializers.Serializer):
    seller_id = serializers.UUIDField()
    seller_name = serializers.CharField()
    order_count = serializers.IntegerField()
    validation_rate = serializers.FloatField(help_text="Percent of orders confirmed or completed")


class TopSellerSerializer(serializers.Serializer):
    seller_id = serializers.UUIDField()
    seller_name = serializers.CharField()
    revenue = serializers.DecimalField(**MONEY)
    order_count = serializers.IntegerField()


class SellerAnalyticsSerializer(serializers.Serializer):
    total_sellers = serializers.IntegerField()
    orders_per_seller = SellerOrdersSerializer(many=True)
    top_performing_sellers = TopSellerSerializer(many=True)


class FinancialAnalyticsSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(**MONEY)
    daily_revenue = serializers.DecimalField(**MONEY)
    monthly_revenue = serializers.DecimalField(**MONEY)
    yearly_revenue = serializers.DecimalField(**MONEY)
    total_costs = serializers.DecimalField(**MONEY)
    profit_margin = serializers.FloatField()
    storage_costs = serializers.DecimalField(**MONEY)
    net_profit = serializers.DecimalField(**MONEY)


class ClientStatsSerializer(serializers.Serializer):
    client_id = serializers.CharField()
    client_name = serializers.CharField()
    order_count = serializers.IntegerField()
    total_spent = serializers.DecimalField(**MONEY)
    last_order = serializers.CharField(required=False)


class ClientAnalyticsSerializer(serializers.Serializer):
    total_clients = serializers.IntegerField()
    most_active_client = ClientStatsSerializer()
    client_order_history = ClientStatsSerializer(many=True)


class AdminDashboardSerializer(serializers.Serializer):
    orders = OrderAnalyticsSerializer()
    products = ProductAnalyticsSerializer()
    sellers = SellerAnalyticsSerializer()
    financial = FinancialAnalyticsSerializer()
    clients = ClientAnalyticsSerializer()
