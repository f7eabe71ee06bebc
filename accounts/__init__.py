"""
Accounts module - staff profiles, identity and role policy.

This module handles:
- Staff profile entity and persistence
- Resolving sessions to staff, customer or anonymous identities
- Role-based permissions between staff roles
- Staff provisioning and customer sign-up
"""
