"""
Unit tests for customer sign-up.
"""
import pytest

from accounts.application.commands.register_customer import RegisterCustomerCommand
from accounts.application.handlers.register_customer_handler import RegisterCustomerHandler
from core.domain.exceptions import EmailAlreadyRegisteredError, ValidationError
from core.ports.record_store import Collections
from customers.domain.customer import Customer


@pytest.fixture
def handler(customer_repository, identity_provider, bus):
    return RegisterCustomerHandler(customer_repository, identity_provider, event_bus=bus)


@pytest.mark.asyncio
class TestRegisterCustomerHandler:
    """Tests for RegisterCustomerHandler."""

    async def test_creates_account_and_customer(self, handler, identity_provider, store):
        result = await handler.handle(
            RegisterCustomerCommand(
                email="Jane@Example.com",
                password="hunter22",
                full_name="Jane Roe",
                company="Roe Ltd",
            )
        )

        assert result.email == "jane@example.com"
        account = identity_provider.users[result.user_id]
        assert account.metadata["user_type"] == "customer"
        rows = store.rows(Collections.CUSTOMERS)
        assert len(rows) == 1
        assert rows[0]["auth_user_id"] == result.user_id
        assert rows[0]["company"] == "Roe Ltd"

    async def test_missing_fields(self, handler):
        with pytest.raises(ValidationError, match="Missing required fields"):
            await handler.handle(
                RegisterCustomerCommand(email="jane@example.com", password="hunter22", full_name="")
            )

    async def test_short_password(self, handler, identity_provider):
        with pytest.raises(ValidationError, match="at least 6 characters"):
            await handler.handle(
                RegisterCustomerCommand(email="jane@example.com", password="abc", full_name="Jane")
            )
        assert identity_provider.users == {}

    async def test_invalid_email(self, handler):
        with pytest.raises(ValidationError):
            await handler.handle(
                RegisterCustomerCommand(email="jane", password="hunter22", full_name="Jane")
            )

    async def test_existing_account(self, handler, identity_provider):
        identity_provider.add("jane@example.com")

        with pytest.raises(EmailAlreadyRegisteredError, match="already registered"):
            await handler.handle(
                RegisterCustomerCommand(
                    email="jane@example.com", password="hunter22", full_name="Jane"
                )
            )

    async def test_links_existing_customer_record(self, handler, customer_repository, store):
        existing = await customer_repository.save(
            Customer.create(email="jane@example.com", full_name="Jane (sales)")
        )

        result = await handler.handle(
            RegisterCustomerCommand(email="jane@example.com", password="hunter22", full_name="Jane")
        )

        assert result.customer_id == existing.id
        rows = store.rows(Collections.CUSTOMERS)
        assert len(rows) == 1
        assert rows[0]["auth_user_id"] == result.user_id
