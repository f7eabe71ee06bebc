"""
Products module - sellable, licensable products.
"""
