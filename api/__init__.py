"""
HTTP API - REST endpoints over the application handlers.
"""
