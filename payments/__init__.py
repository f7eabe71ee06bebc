"""
Payments module - payment provider event reconciliation.

This module handles:
- Parsing provider webhook payloads into a closed set of events
- Webhook signature verification
- Reconciling subscriptions, licenses and sales with payment outcomes
- The optional processed-event ledger
"""
