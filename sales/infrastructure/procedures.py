"""
Store procedures for the Django record store.

Procedures receive a params dict and run inside the transaction opened
by ``DjangoRecordStore.call``.
"""
import logging
from typing import Any, Dict

from django.conf import settings
from django.utils import timezone

from core.domain.exceptions import ProductNotFoundError
from customers.infrastructure.models import Customer
from licenses.domain.license import generate_license_key
from licenses.infrastructure.models import License
from products.infrastructure.models import Product
from sales.infrastructure.models import Sale
from subscriptions.infrastructure.models import Subscription

logger = logging.getLogger(__name__)


def process_payment(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Record a completed payment as customer, subscription, license and sale.

    Args:
        params: ``customer_email``, ``customer_name``, ``product_sku``,
            ``payment_reference``

    Returns:
        Ids of the written records and the license key

    Raises:
        ProductNotFoundError: If no active product has the SKU
    """
    product = Product.objects.filter(sku=params["product_sku"], is_active=True).first()
    if product is None:
        raise ProductNotFoundError(f"Product {params['product_sku']} not found")

    email = params["customer_email"]
    customer, created = Customer.objects.get_or_create(
        email=email,
        defaults={"full_name": params.get("customer_name") or email.split("@", 1)[0]},
    )
    if created:
        logger.info("Customer created by process_payment", extra={"customer_id": str(customer.id)})

    now = timezone.now()
    subscription = Subscription.objects.create(
        customer=customer,
        product=product,
        subscription_type=product.subscription_type,
        status="active",
        payment_status="paid",
        amount=product.price,
        currency=product.currency,
        created_at=now,
    )
    license = License.objects.create(
        subscription=subscription,
        customer=customer,
        product=product,
        license_key=generate_license_key(settings.LICENSES["KEY_PREFIX"]),
        status="active",
        max_activations=product.max_activations,
        current_activations=1,
        activated_at=now,
    )
    sale = Sale.objects.create(
        subscription=subscription,
        customer=customer,
        product=product,
        amount=product.price,
        currency=product.currency,
        payment_status="paid",
        payment_method="stripe",
        payment_reference=params.get("payment_reference"),
        notes=f"Stripe payment - {product.subscription_type}",
    )
    return {
        "customer_id": customer.id,
        "subscription_id": subscription.id,
        "license_id": license.id,
        "license_key": license.license_key,
        "sale_id": sale.id,
    }
