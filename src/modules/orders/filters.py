import django_filters

from modules.orders.constants import OrderStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    """``?status=`` is case-insensitive; an unknown status is a 400."""

    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    customer = django_filters.UUIDFilter(field_name="customer_id")
    start_date = django_filters.DateFilter(
        field_name="created_at__date", lookup_expr="gte"
    )
    end_date = django_filters.DateFilter(
        field_name="created_at__date", lookup_expr="lte"
    )

    class Meta:
        model = Order
        fields = ["status", "customer", "start_date", "end_date"]

    def __init__(self, data=None, *args, **kwargs):
        if data is not None and data.get("status"):
            data = data.copy()
            data["status"] = data["status"].upper()
        super().__init__(data, *args, **kwargs)
