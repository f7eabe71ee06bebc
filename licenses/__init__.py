"""
Licenses module - activatable license keys.

This module handles:
- License entity and domain logic
- License lifecycle (activation on payment, revocation)
- Seat activation against the activation limit
"""
