"""
Customers module - license purchasers.

This module handles:
- Customer entity and persistence
- Lookup by email and by identity-provider link
"""
