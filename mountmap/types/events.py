"""
Change Event Types

A ChangeEvent is published for every successful write into a mounted
document. Events are ephemeral: they are delivered to subscribers and
never stored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ChangeEvent(BaseModel):
    """
    Notification for one applied mutation.

    Attributes:
        mount: Name of the mount that was written
        key: The immediate key that changed (last path segment, as a string)
        value: The value written at that key
        path: Full in-mount path of the changed key, dot-joined
    """

    model_config = ConfigDict(frozen=True)

    mount: str
    key: str
    value: Any = None
    path: str = ""
