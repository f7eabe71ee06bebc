"""
Unit tests for Subscription domain entity.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.domain.exceptions import InvalidSubscriptionStatusError
from core.domain.value_objects import PaymentStatus, SubscriptionStatus, SubscriptionType
from subscriptions.domain.subscription import Subscription


def _subscription(subscription_type=SubscriptionType.MONTHLY, **kwargs):
    return Subscription.create(
        customer_id=uuid.uuid4(),
        product_id=uuid.uuid4(),
        subscription_type=subscription_type,
        amount=Decimal("19.90"),
        **kwargs,
    )


class TestSubscriptionEntity:
    """Tests for Subscription domain entity."""

    def test_create_is_pending(self):
        subscription = _subscription(currency="eur")

        assert subscription.status is SubscriptionStatus.PENDING
        assert subscription.payment_status is PaymentStatus.PENDING
        assert subscription.currency == "EUR"
        assert subscription.trial_ends_at is None

    def test_trial_end_set_for_trials_only(self):
        trial = _subscription(SubscriptionType.TRIAL, trial_days=14)
        monthly = _subscription(trial_days=14)

        assert trial.trial_ends_at - trial.created_at == timedelta(days=14)
        assert monthly.trial_ends_at is None

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            Subscription.create(
                customer_id=uuid.uuid4(),
                product_id=uuid.uuid4(),
                subscription_type=SubscriptionType.MONTHLY,
                amount=Decimal("-1"),
            )

    def test_confirm_payment(self):
        confirmed = _subscription().confirm_payment()

        assert confirmed.status is SubscriptionStatus.ACTIVE
        assert confirmed.payment_status is PaymentStatus.PAID

    def test_confirm_payment_requires_pending(self):
        confirmed = _subscription().confirm_payment()

        with pytest.raises(InvalidSubscriptionStatusError):
            confirmed.confirm_payment()

    def test_payment_failure_keeps_lifecycle_status(self):
        failed = _subscription().mark_payment_failed()

        assert failed.status is SubscriptionStatus.PENDING
        assert failed.payment_status is PaymentStatus.FAILED
        assert failed.confirm_payment().status is SubscriptionStatus.ACTIVE

    def test_expired_trial_reported_at_read_time(self):
        trial = replace(
            _subscription(SubscriptionType.TRIAL, trial_days=7),
            status=SubscriptionStatus.TRIAL,
        )
        later = trial.trial_ends_at + timedelta(seconds=1)

        assert trial.effective_status() is SubscriptionStatus.TRIAL
        assert trial.effective_status(later) is SubscriptionStatus.EXPIRED
        assert trial.status is SubscriptionStatus.TRIAL

    def test_trial_without_end_never_expires(self):
        trial = replace(_subscription(SubscriptionType.TRIAL), status=SubscriptionStatus.TRIAL)

        assert trial.is_trial() is True
        assert trial.is_trial_expired(datetime.now(timezone.utc) + timedelta(days=3650)) is False
