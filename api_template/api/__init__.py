"""API layer package for FastAPI application and route composition."""

from .application import api_list_route_table, create_api_application

__all__ = ["api_list_route_table", "create_api_application"]
