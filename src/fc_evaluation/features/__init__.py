"""
Feature-importance utilities.

This module provides:

- rank_importance: stable descending sort of an importance table, truncated
  to the top ``k`` features.
"""

from .importance import rank_importance

__all__ = ["rank_importance"]
