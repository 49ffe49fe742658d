"""Project sources — host bindings that supply category metadata.

Public re-exports for convenient access.
"""

from unity_constants.adapters.base import ProjectSource, SourceError
from unity_constants.adapters.mock import StaticProjectSource
from unity_constants.adapters.unity import UnityProjectSource

__all__ = [
    "ProjectSource",
    "SourceError",
    "StaticProjectSource",
    "UnityProjectSource",
]
