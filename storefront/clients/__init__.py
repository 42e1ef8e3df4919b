"""
Clientes para APIs externas
"""

from .printify_client import PrintifyClient, PrintifyClientFactory, backoff_delay

__all__ = [
    "PrintifyClient",
    "PrintifyClientFactory",
    "backoff_delay",
]
