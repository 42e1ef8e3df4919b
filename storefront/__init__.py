"""
SDFM storefront backend: checkout costs and Printify order fulfillment.
"""

__version__ = "0.1.0"
