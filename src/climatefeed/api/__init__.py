"""HTTP Read API for climatefeed."""

from climatefeed.api.app import API_PREFIX, create_application

__all__ = ["API_PREFIX", "create_application"]
