"""
services/ - Service Layer
=========================
Entry points used by the web layer.
"""

from services.query_service import QueryService

__all__ = ["QueryService"]
