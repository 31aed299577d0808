"""Store URL patterns, grouped by area."""

from django.urls import path

from . import views

customer_urlpatterns = [
    path("cart", views.CartIndexView.as_view()),
    path("cart/index", views.CartIndexView.as_view(), name="cart-index"),
    path("cart/plus", views.CartPlusView.as_view(), name="cart-plus"),
    path("cart/minus", views.CartMinusView.as_view(), name="cart-minus"),
    path("cart/remove", views.CartRemoveView.as_view(), name="cart-remove"),
    path("cart/summary", views.CartSummaryView.as_view(), name="cart-summary"),
    path("cart/orderConfirmation", views.OrderConfirmationView.as_view(), name="cart-order-confirmation"),
]

admin_urlpatterns = [
    path("order", views.OrderIndexView.as_view()),
    path("order/index", views.OrderIndexView.as_view(), name="order-index"),
    path("order/getAll", views.OrderListApiView.as_view(), name="order-getall"),
    path("order/details", views.OrderDetailsView.as_view(), name="order-details"),
    path("order/updateOrderDetail", views.UpdateOrderDetailView.as_view(), name="order-update-detail"),
    path("order/startProcessing", views.StartProcessingView.as_view(), name="order-start-processing"),
    path("order/shipOrder", views.ShipOrderView.as_view(), name="order-ship"),
    path("order/cancelOrder", views.CancelOrderView.as_view(), name="order-cancel"),
    path("order/paymentConfirmation", views.PaymentConfirmationView.as_view(), name="order-payment-confirmation"),
]
