"""
Modelos de datos compartidos del storefront
"""
