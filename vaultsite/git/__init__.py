"""Git integration for exported sites."""

from .publisher import Publisher

__all__ = ["Publisher"]
