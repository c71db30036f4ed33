"""
Map Schema Types

Diagnostics produced when checking a map schema against loaded mounts.
"""

from pydantic import BaseModel


class ReferenceIssue(BaseModel):
    """
    A map leaf whose reference path cannot be bound.

    Attributes:
        map_path: Dotted location of the leaf in the map
        reference: The reference path stored at that leaf
        mount: Mount name the reference asks for
    """

    map_path: str
    reference: str
    mount: str
