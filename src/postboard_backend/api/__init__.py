"""API layer: application factory, routers, payload models and services."""

from postboard_backend.api.app import create_api

__all__ = ["create_api"]
