"""API module for bracket data fetching."""

from .bracket_api import BracketAPI

__all__ = ["BracketAPI"]
