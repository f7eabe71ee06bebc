"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and value objects
- The record store port and its adapters
- Middleware, metrics and tracing setup
- Health check views
"""
