import django_filters

from .models import Order, Product


class ProductFilter(django_filters.FilterSet):
    """
    Query parameters of the product list.

    Views validate the parameters through ``form.cleaned_data`` and hand the
    cleaned values to CatalogService, which applies them in catalog order.
    """

    search = django_filters.CharFilter(method="filter_noop")
    keyword = django_filters.CharFilter(method="filter_noop")

    # Price range filters (inclusive)
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["search", "keyword", "min_price", "max_price"]

    def filter_noop(self, queryset, name, value):
        return queryset


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Order.STATUS_CHOICES)

    class Meta:
        model = Order
        fields = ["status"]


def cleaned_filters(filterset_class, query_params):
    """
    Validate ``query_params`` against ``filterset_class``.

    Returns (filters, errors); filters only holds the parameters that were given.
    """
    filterset = filterset_class(query_params, queryset=filterset_class._meta.model.objects.none())
    if not filterset.is_valid():
        return None, filterset.errors
    return {key: value for key, value in filterset.form.cleaned_data.items() if value not in (None, "")}, None
