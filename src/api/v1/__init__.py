"""
API v1 package.

Contains the agent-facing routes of the Purchase Verification API.
"""

from src.api.v1.routes import router

__all__ = ["router"]
