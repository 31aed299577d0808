"""Store views: shopping cart, checkout and admin order management."""

import logging
from datetime import timedelta
from decimal import Decimal

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views import View
from django.views.generic import TemplateView

from bulkybook.core.mixins import RoleRequiredMixin
from bulkybook.core.roles import ORDER_MANAGER_ROLES

from .cart import MAX_CART_COUNT, clear_cart_count, refresh_cart_count
from .forms import SHIPPING_FIELDS, OrderDetailsForm, ShipOrderForm, ShippingForm
from .models import OrderDetail, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

ORDER_CONFIRMATION_SUBJECT = "New Order - Bulky Book"


def _int_param(params, name):
    value = params.get(name, "")
    return int(value) if value.isdigit() else None


def _redirect_with_query(name, **params):
    query = "&".join(f"{key}={value}" for key, value in params.items())
    return redirect(f"{reverse(name)}?{query}")


def _see_other(url):
    response = redirect(url)
    response.status_code = 303
    return response


def _cart_lines(request):
    return request.unit_of_work.shopping_cart.get_all(
        include=["product", "product__images"],
        application_user=request.user,
    )


def _cart_total(lines) -> Decimal:
    return sum((line.line_total for line in lines), Decimal("0"))


# =============================================================================
# Customer: cart and checkout
# =============================================================================


class CartIndexView(LoginRequiredMixin, TemplateView):
    template_name = "customer/cart/index.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        lines = _cart_lines(self.request)
        context["lines"] = lines
        context["order_total"] = _cart_total(lines)
        return context


class _CartLineView(LoginRequiredMixin, View):
    """Base for the plus / minus / remove actions on one cart line."""

    def post(self, request):
        uow = request.unit_of_work
        cart_id = _int_param(request.GET, "cartId") or _int_param(request.POST, "cartId")
        cart = uow.shopping_cart.get(id=cart_id, application_user=request.user) if cart_id else None
        if cart is None:
            raise Http404("Cart line not found")

        self.apply(uow, cart)
        uow.save()
        refresh_cart_count(request)
        return redirect("customer:cart-index")

    def apply(self, uow, cart):
        raise NotImplementedError


class CartPlusView(_CartLineView):
    def apply(self, uow, cart):
        if cart.count >= MAX_CART_COUNT:
            messages.error(self.request, f"A cart line holds at most {MAX_CART_COUNT} copies.")
            return
        cart.count += 1
        uow.shopping_cart.update(cart)


class CartMinusView(_CartLineView):
    def apply(self, uow, cart):
        if cart.count <= 1:
            uow.shopping_cart.remove(cart)
        else:
            cart.count -= 1
            uow.shopping_cart.update(cart)


class CartRemoveView(_CartLineView):
    def apply(self, uow, cart):
        uow.shopping_cart.remove(cart)


class CartSummaryView(LoginRequiredMixin, View):
    """Checkout: confirm shipping details and place the order.

    Company users get delayed payment terms; everyone else pays through
    Stripe Checkout.
    """

    template_name = "customer/cart/summary.html"

    def _render(self, request, form, lines):
        return render(
            request,
            self.template_name,
            {"form": form, "lines": lines, "order_total": _cart_total(lines)},
        )

    def get(self, request):
        lines = _cart_lines(request)
        user = request.user
        form = ShippingForm(initial={field: getattr(user, field, "") for field in SHIPPING_FIELDS})
        return self._render(request, form, lines)

    def post(self, request):
        uow = request.unit_of_work
        lines = _cart_lines(request)
        if not lines:
            messages.error(request, "Your cart is empty")
            return redirect("customer:cart-index")

        form = ShippingForm(request.POST)
        if not form.is_valid():
            return self._render(request, form, lines)

        order = form.save(commit=False)
        order.application_user = request.user
        order.order_date = timezone.now()
        order.order_total = _cart_total(lines)

        is_company_user = request.user.company_id is not None
        if is_company_user:
            order.order_status = OrderStatus.APPROVED
            order.payment_status = PaymentStatus.DELAYED
        else:
            order.order_status = OrderStatus.PENDING
            order.payment_status = PaymentStatus.PENDING

        uow.order_header.add(order)
        details = [
            OrderDetail(order_header=order, product=line.product, count=line.count, price=line.unit_price)
            for line in lines
        ]
        for detail in details:
            uow.order_detail.add(detail)
        # Header and lines commit together; the header is inserted first
        uow.save()
        logger.info(f"Order {order.pk} placed by {request.user.email}")

        if is_company_user:
            return _redirect_with_query("customer:cart-order-confirmation", id=order.pk)

        payments = request.services.payments
        success_url = request.build_absolute_uri(
            f"{reverse('customer:cart-order-confirmation')}?id={order.pk}"
        )
        cancel_url = request.build_absolute_uri(reverse("customer:cart-index"))
        session = payments.create_checkout_session(
            details,
            success_url=success_url,
            cancel_url=cancel_url,
            metadata={"order_id": str(order.pk)},
        )

        uow.order_header.update_stripe_payment_id(order.pk, session.id, None)
        uow.save()
        return _see_other(session.url)


class OrderConfirmationView(LoginRequiredMixin, View):
    """Stripe success page: record payment, send mail and clear the cart."""

    template_name = "customer/cart/order_confirmation.html"

    def get(self, request):
        uow = request.unit_of_work
        order_id = _int_param(request.GET, "id")
        order = uow.order_header.get(id=order_id, include="application_user") if order_id else None
        if order is None or order.application_user_id != request.user.pk:
            raise Http404("Order not found")

        services = request.services
        if not order.is_delayed_payment and order.session_id:
            session = services.payments.retrieve_session(order.session_id)
            if services.payments.is_paid(session):
                uow.order_header.update_stripe_payment_id(order.pk, session.id, session.payment_intent)
                uow.order_header.update_status(order.pk, OrderStatus.APPROVED, PaymentStatus.APPROVED)
                uow.save()
                logger.info(f"Order {order.pk} paid")

        services.email_sender.send_email(
            order.application_user.email,
            ORDER_CONFIRMATION_SUBJECT,
            f"<p>New Order Created - {order.pk}</p>",
        )

        uow.shopping_cart.remove_range(
            uow.shopping_cart.get_all(application_user_id=order.application_user_id)
        )
        uow.save()
        clear_cart_count(request)

        return render(request, self.template_name, {"order_id": order.pk})


# =============================================================================
# Admin: orders
# =============================================================================

STATUS_FILTERS = {
    "pending": {"payment_status": PaymentStatus.DELAYED},
    "inprocess": {"order_status": OrderStatus.PROCESSING},
    "completed": {"order_status": OrderStatus.SHIPPED},
    "approved": {"order_status": OrderStatus.APPROVED},
}


def _is_order_manager(user):
    return user.is_superuser or user.has_role(*ORDER_MANAGER_ROLES)


def serialize_order(order):
    """Order row as consumed by static/js/order.js."""
    return {
        "id": order.pk,
        "name": order.name,
        "phoneNumber": order.phone_number,
        "applicationUser": {
            "email": order.application_user.email,
            "name": order.application_user.name,
        },
        "orderStatus": order.order_status,
        "paymentStatus": order.payment_status,
        "orderTotal": float(order.order_total),
        "orderDate": order.order_date.isoformat(),
    }


class OrderIndexView(LoginRequiredMixin, TemplateView):
    """Order grid page; rows are loaded from OrderListApiView."""

    template_name = "admin/order/index.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["status"] = self.request.GET.get("status", "all")
        return context


class OrderListApiView(LoginRequiredMixin, View):
    """GET /admin/order/getAll - orders for the admin grid.

    Order managers see every order, other users only their own.
    """

    def get(self, request):
        filters = dict(STATUS_FILTERS.get(request.GET.get("status", "").lower(), {}))
        if not _is_order_manager(request.user):
            filters["application_user"] = request.user

        orders = request.unit_of_work.order_header.get_all(include="application_user", **filters)
        return JsonResponse({"data": [serialize_order(order) for order in orders]})


class _OrderView(LoginRequiredMixin, View):
    """Shared order lookup for the order pages and actions."""

    def get_order(self, order_id, include="application_user"):
        order = self.request.unit_of_work.order_header.get(id=order_id, include=include) if order_id else None
        if order is None:
            raise Http404("Order not found")
        if not _is_order_manager(self.request.user) and order.application_user_id != self.request.user.pk:
            raise Http404("Order not found")
        return order

    def redirect_to_details(self, order_id):
        return _redirect_with_query("admin:order-details", orderId=order_id)


class OrderDetailsView(_OrderView):
    """Order details; POST starts Stripe payment of a delayed-payment order."""

    template_name = "admin/order/details.html"

    def get(self, request):
        order = self.get_order(_int_param(request.GET, "orderId"))
        details = request.unit_of_work.order_detail.get_all(include="product", order_header=order)
        return render(
            request,
            self.template_name,
            {
                "order": order,
                "details": details,
                "form": OrderDetailsForm(instance=order),
                "is_order_manager": _is_order_manager(request.user),
            },
        )

    def post(self, request):
        """Pay now for an order placed with delayed payment terms."""
        uow = request.unit_of_work
        order = self.get_order(_int_param(request.POST, "orderId"))
        if not order.is_delayed_payment:
            messages.error(request, "Order is not awaiting payment")
            return self.redirect_to_details(order.pk)

        details = uow.order_detail.get_all(include="product", order_header=order)
        success_url = request.build_absolute_uri(
            f"{reverse('admin:order-payment-confirmation')}?orderHeaderId={order.pk}"
        )
        cancel_url = request.build_absolute_uri(f"{reverse('admin:order-details')}?orderId={order.pk}")
        session = request.services.payments.create_checkout_session(
            details,
            success_url=success_url,
            cancel_url=cancel_url,
            metadata={"order_id": str(order.pk)},
        )

        uow.order_header.update_stripe_payment_id(order.pk, session.id, None)
        uow.save()
        return _see_other(session.url)


class PaymentConfirmationView(_OrderView):
    """Stripe success page for delayed payments."""

    template_name = "admin/order/payment_confirmation.html"

    def get(self, request):
        uow = request.unit_of_work
        order = self.get_order(_int_param(request.GET, "orderHeaderId"))

        if order.is_delayed_payment and order.session_id:
            payments = request.services.payments
            session = payments.retrieve_session(order.session_id)
            if payments.is_paid(session):
                uow.order_header.update_stripe_payment_id(order.pk, session.id, session.payment_intent)
                uow.order_header.update_status(order.pk, order.order_status, PaymentStatus.APPROVED)
                uow.save()
                logger.info(f"Delayed payment received for order {order.pk}")

        return render(request, self.template_name, {"order_id": order.pk})


class _OrderManagerView(RoleRequiredMixin, _OrderView):
    required_roles = ORDER_MANAGER_ROLES


class UpdateOrderDetailView(_OrderManagerView):
    def post(self, request):
        uow = request.unit_of_work
        order = self.get_order(_int_param(request.POST, "orderId"), include=None)
        form = OrderDetailsForm(request.POST, instance=order)
        if not form.is_valid():
            messages.error(request, "Order details are invalid")
            return self.redirect_to_details(order.pk)

        order = form.save(commit=False)
        fields = list(SHIPPING_FIELDS)
        # Blank carrier / tracking leave the stored values alone
        for field in ("carrier", "tracking_number"):
            if form.cleaned_data.get(field):
                fields.append(field)
        uow.order_header.update(order, update_fields=fields)
        uow.save()

        messages.success(request, "Order Details Updated Successfully.")
        return self.redirect_to_details(order.pk)


class StartProcessingView(_OrderManagerView):
    def post(self, request):
        uow = request.unit_of_work
        order = self.get_order(_int_param(request.POST, "orderId"), include=None)
        uow.order_header.update_status(order.pk, OrderStatus.PROCESSING)
        uow.save()

        messages.success(request, "Order Details Updated Successfully.")
        return self.redirect_to_details(order.pk)


class ShipOrderView(_OrderManagerView):
    def post(self, request):
        uow = request.unit_of_work
        order = self.get_order(_int_param(request.POST, "orderId"), include=None)
        form = ShipOrderForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Carrier and tracking number are required to ship an order")
            return self.redirect_to_details(order.pk)

        order.tracking_number = form.cleaned_data["tracking_number"]
        order.carrier = form.cleaned_data["carrier"]
        order.order_status = OrderStatus.SHIPPED
        order.shipping_date = timezone.now()
        fields = ["tracking_number", "carrier", "order_status", "shipping_date"]
        if order.is_delayed_payment:
            order.payment_due_date = (timezone.now() + timedelta(days=30)).date()
            fields.append("payment_due_date")

        uow.order_header.update(order, update_fields=fields)
        uow.save()

        messages.success(request, "Order Shipped Successfully.")
        return self.redirect_to_details(order.pk)


class CancelOrderView(_OrderManagerView):
    """Cancel an order, refunding it through Stripe when it was paid."""

    def post(self, request):
        uow = request.unit_of_work
        order = self.get_order(_int_param(request.POST, "orderId"), include=None)

        if order.payment_status == PaymentStatus.APPROVED and order.payment_intent_id:
            request.services.payments.refund(order.payment_intent_id)
            uow.order_header.update_status(order.pk, OrderStatus.CANCELLED, PaymentStatus.REFUNDED)
        else:
            uow.order_header.update_status(order.pk, OrderStatus.CANCELLED, PaymentStatus.CANCELLED)
        uow.save()

        messages.success(request, "Order Cancelled Successfully.")
        return self.redirect_to_details(order.pk)
