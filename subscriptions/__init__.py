"""
Subscriptions module - purchase agreements and their lifecycle.

This module handles:
- Subscription entity and state transitions
- Checkout (pending subscription, inactive license, pending sale)
- Read-time trial expiry queries
"""
