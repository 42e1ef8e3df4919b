"""
E-commerce Domain

Print-on-demand checkout and order fulfillment backed by Printify.
"""
