"""
RegisterCustomerCommand.

Command for customer self sign-up.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RegisterCustomerCommand:
    """Command to create a customer account and customer record."""

    email: str
    password: str
    full_name: str
    company: Optional[str] = None
    phone: Optional[str] = None
