"""
HTTP client for the mixed payment API.
"""

from app.client.mixed_payment import MixedPaymentClient

__all__ = ["MixedPaymentClient"]
