"""
Utility Functions

Helpers shared by the outer surfaces (HTTP listener and CLI).

Modules:
    coercion: Text -> JSON value coercion for query strings and arguments
"""

from mountmap.utils.coercion import coerce_scalar, parse_value

__all__ = ["coerce_scalar", "parse_value"]
