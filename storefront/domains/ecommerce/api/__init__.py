"""
E-commerce API Layer
"""
