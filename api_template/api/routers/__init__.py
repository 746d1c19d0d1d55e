"""API router package for endpoint composition."""

from .api_root import api_create_api_router
from .api_v1 import api_create_v1_router
from .root import api_create_root_router

__all__ = ["api_create_api_router", "api_create_root_router", "api_create_v1_router"]
