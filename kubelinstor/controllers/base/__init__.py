"""Base classes for resolvers."""

from kubelinstor.controllers.base.base_resolver import BaseResolver

__all__ = ["BaseResolver"]
