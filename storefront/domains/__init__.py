"""
Bounded contexts of the storefront backend.
"""
