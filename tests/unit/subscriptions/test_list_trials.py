"""
Unit tests for ListTrialsHandler.
"""
import asyncio
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.domain.exceptions import PermissionDeniedError
from core.domain.value_objects import SubscriptionStatus, SubscriptionType
from subscriptions.application.handlers.list_trials_handler import ListTrialsHandler
from subscriptions.application.queries.list_trials import ListTrialsQuery
from subscriptions.domain.subscription import Subscription

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def trials(subscription_repository):
    """Two running trials and two ended ones."""

    def trial(ends_in):
        subscription = replace(
            Subscription.create(
                customer_id=uuid.uuid4(),
                product_id=uuid.uuid4(),
                subscription_type=SubscriptionType.TRIAL,
                amount=Decimal("0"),
            ),
            status=SubscriptionStatus.TRIAL,
            trial_ends_at=NOW + ends_in,
        )
        return asyncio.run(subscription_repository.save(subscription))

    return {
        "ended_long_ago": trial(timedelta(days=-30)),
        "ended": trial(timedelta(days=-1)),
        "later": trial(timedelta(days=10)),
        "soon": trial(timedelta(days=2)),
    }


@pytest.mark.asyncio
class TestListTrialsHandler:
    """Tests for ListTrialsHandler."""

    async def test_expired_trials_most_recent_first(
        self, subscription_repository, trials, staff_member
    ):
        result = await ListTrialsHandler(subscription_repository).handle(
            ListTrialsQuery(expired=True, requested_by=staff_member, now=NOW)
        )

        assert [trial.id for trial in result] == [trials["ended"].id, trials["ended_long_ago"].id]
        assert {trial.status for trial in result} == {"expired"}

    async def test_running_trials_by_end_date(self, subscription_repository, trials, staff_member):
        result = await ListTrialsHandler(subscription_repository).handle(
            ListTrialsQuery(expired=False, requested_by=staff_member, now=NOW)
        )

        assert [trial.id for trial in result] == [trials["soon"].id, trials["later"].id]
        assert {trial.status for trial in result} == {"trial"}

    async def test_listing_writes_nothing(self, store, subscription_repository, trials, admin):
        await ListTrialsHandler(subscription_repository).handle(
            ListTrialsQuery(expired=True, requested_by=admin, now=NOW)
        )

        stored = await subscription_repository.find_by_id(trials["ended"].id)
        assert stored.status is SubscriptionStatus.TRIAL

    async def test_customers_refused(self, subscription_repository, customer_identity):
        with pytest.raises(PermissionDeniedError):
            await ListTrialsHandler(subscription_repository).handle(
                ListTrialsQuery(expired=True, requested_by=customer_identity, now=NOW)
            )
