"""Store forms."""

from django import forms

from .models import OrderHeader

SHIPPING_FIELDS = ("name", "phone_number", "street_address", "city", "state", "postal_code")


class ShippingForm(forms.ModelForm):
    """Shipping details entered at checkout."""

    class Meta:
        model = OrderHeader
        fields = SHIPPING_FIELDS


class OrderDetailsForm(forms.ModelForm):
    """Fields an order manager may correct on an existing order."""

    class Meta:
        model = OrderHeader
        fields = SHIPPING_FIELDS + ("carrier", "tracking_number")


class ShipOrderForm(forms.Form):
    carrier = forms.CharField(max_length=100)
    tracking_number = forms.CharField(max_length=100)
