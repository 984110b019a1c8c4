"""
Domain services containing pure business logic.
"""

from domain.services.loyalty_service import LoyaltyService

__all__ = ["LoyaltyService"]
