"""
Order Service - order lifecycle, pricing and domain events.
"""

from order_service.version import __version__

__all__ = ["__version__"]
