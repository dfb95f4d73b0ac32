from dataclasses import dataclass

from gemrush.components.gem_source import GemSource


@dataclass(slots=True)
class GemRegistry:
    """Registry component holding the session's gem source.

    Looking the registry up (rather than the source itself) keeps any
    GemSource subclass injectable, since components are keyed by exact type.
    """
    source: GemSource
