# sales/api/urls.py

from django.urls import path

from sales.api.views import SalesInvoicePostView, SalesPaymentPostView

urlpatterns = [
    path("invoices/<int:pk>/post/", SalesInvoicePostView.as_view(), name="sales-invoice-post"),
    path("payments/<int:pk>/post/", SalesPaymentPostView.as_view(), name="sales-payment-post"),
]
