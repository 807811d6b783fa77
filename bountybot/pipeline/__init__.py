"""Event routing and staged handler execution."""

from __future__ import annotations

from .executor import HandlerRecord, InvocationReport, PipelineExecutor, PipelineState
from .models import (
    BotContext,
    BotServices,
    Event,
    EventKind,
    Handler,
    HandlerResult,
    HandlerStatus,
    PipelineDefinition,
    event_kind,
    handler_name,
)
from .router import EventRouter

__all__ = [
    "BotContext",
    "BotServices",
    "Event",
    "EventKind",
    "EventRouter",
    "Handler",
    "HandlerRecord",
    "HandlerResult",
    "HandlerStatus",
    "InvocationReport",
    "PipelineDefinition",
    "PipelineExecutor",
    "PipelineState",
    "event_kind",
    "handler_name",
]
