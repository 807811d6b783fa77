"""Static routing from event kind to pipeline definition."""

from __future__ import annotations

import types
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import PipelineDefinition


class EventRouter:
    """Resolve event kinds against a routing table fixed at construction.

    Kinds without a route resolve to ``None``. That is the normal path for
    events the bot does not act on, not an error.
    """

    def __init__(self, routes: cabc.Mapping[str, PipelineDefinition]) -> None:
        """Freeze a copy of ``routes``."""
        self._routes: cabc.Mapping[str, PipelineDefinition] = types.MappingProxyType(
            dict(routes)
        )

    def resolve(self, kind: str) -> PipelineDefinition | None:
        """Return the pipeline for ``kind`` or ``None`` when unrouted."""
        return self._routes.get(kind)

    @property
    def kinds(self) -> frozenset[str]:
        """Routed kinds."""
        return frozenset(self._routes)
