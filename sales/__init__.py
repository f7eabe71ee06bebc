"""
Sales module - payment records tied to subscriptions.
"""
