from prometheus_client import Counter, Histogram


# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total orders placed", ["source"])
order_status_changes_total = Counter(
    "marketplace_order_status_changes_total", "Order status transitions", ["from_status", "to_status"]
)
order_value = Histogram(
    "marketplace_order_value",
    "Order value distribution",
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, float("inf")],
)

# Cart Metrics
cart_restore_dropped_items_total = Counter(
    "marketplace_cart_restore_dropped_items_total", "Saved cart entries dropped during restore"
)

# Finance Metrics
payments_recorded_total = Counter("marketplace_payments_recorded_total", "Payment records added by sellers")

# Analytics Metrics
admin_dashboard_build_duration = Histogram(
    "marketplace_admin_dashboard_build_seconds", "Time spent building the admin dashboard"
)
