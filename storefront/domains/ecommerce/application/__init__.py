"""
E-commerce Application Layer
"""
