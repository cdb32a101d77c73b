"""Argument rewriting for forwarded commands."""

from kubelinstor.controllers.arguments.expander import ArgumentExpander

__all__ = ["ArgumentExpander"]
