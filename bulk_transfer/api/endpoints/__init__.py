"""REST endpoint routers exposed by the API."""
from . import transfers

__all__ = ["transfers"]
