"""Staged execution of handler pipelines for one event.

Each invocation walks ``ROUTING → PRE → ACTION → POST → WILDCARD → DONE``.
Handlers within a stage run strictly in order and independently: a failing
or raising handler is logged and the next one still runs. Nothing raised by
a handler escapes :meth:`PipelineExecutor.run`, and the wildcard stage runs
exactly once whatever happened before it.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from bountybot.logging import (
    get_logger,
    log_debug,
    log_exception,
    log_info,
    log_warning,
)

from .models import BotContext, HandlerResult, HandlerStatus, handler_name

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import BotServices, Event, Handler
    from .router import EventRouter

logger = get_logger(__name__)


class PipelineState(enum.StrEnum):
    """States of a single invocation."""

    ROUTING = "routing"
    PRE = "pre"
    ACTION = "action"
    POST = "post"
    WILDCARD = "wildcard"
    DONE = "done"


@dc.dataclass(frozen=True, slots=True)
class HandlerRecord:
    """One handler run within an invocation."""

    stage: PipelineState
    handler: str
    result: HandlerResult


@dc.dataclass(slots=True)
class InvocationReport:
    """What happened while handling one event."""

    kind: str
    routed: bool = False
    states: list[PipelineState] = dc.field(default_factory=list)
    handlers: list[HandlerRecord] = dc.field(default_factory=list)

    @property
    def failures(self) -> list[HandlerRecord]:
        """Handler runs that failed."""
        return [
            record
            for record in self.handlers
            if record.result.status is HandlerStatus.FAILED
        ]

    def for_stage(self, stage: PipelineState) -> list[HandlerRecord]:
        """Handler runs belonging to ``stage``, in execution order."""
        return [record for record in self.handlers if record.stage is stage]


class PipelineExecutor:
    """Run routed pipelines followed by the always-run wildcard handlers.

    Parameters
    ----------
    router
        Routing table resolving event kinds to pipeline definitions.
    wildcard
        Handlers run after every event, routed or not.
    services
        Collaborators placed in every handler's :class:`BotContext`.

    """

    def __init__(
        self,
        router: EventRouter,
        wildcard: cabc.Sequence[Handler],
        services: BotServices,
    ) -> None:
        """Store routing data and shared services."""
        self._router = router
        self._wildcard = tuple(wildcard)
        self._services = services

    async def run(self, event: Event) -> InvocationReport:
        """Handle ``event`` and report every stage and handler outcome."""
        context = BotContext(event=event, services=self._services)
        report = InvocationReport(kind=event.kind)

        report.states.append(PipelineState.ROUTING)
        pipeline = self._router.resolve(event.kind)
        if pipeline is None:
            log_debug(logger, "No pipeline routed for %s", event.kind)
        else:
            report.routed = True
            log_info(logger, "Running pipeline for %s", event.kind)
            for stage, handlers in (
                (PipelineState.PRE, pipeline.pre),
                (PipelineState.ACTION, pipeline.action),
                (PipelineState.POST, pipeline.post),
            ):
                await self._run_stage(stage, handlers, context, report)

        await self._run_stage(PipelineState.WILDCARD, self._wildcard, context, report)
        report.states.append(PipelineState.DONE)
        return report

    async def _run_stage(
        self,
        stage: PipelineState,
        handlers: cabc.Sequence[Handler],
        context: BotContext,
        report: InvocationReport,
    ) -> None:
        report.states.append(stage)
        for handler in handlers:
            name = handler_name(handler)
            result = await self._run_handler(stage, name, handler, context)
            report.handlers.append(
                HandlerRecord(stage=stage, handler=name, result=result)
            )

    @staticmethod
    async def _run_handler(
        stage: PipelineState,
        name: str,
        handler: Handler,
        context: BotContext,
    ) -> HandlerResult:
        try:
            result = await handler(context)
        except Exception as exc:  # noqa: BLE001 - a handler failure ends only that handler
            log_exception(
                logger,
                f"Handler {name} failed in {stage} stage for {context.event.kind}",
                exc,
            )
            return HandlerResult.failed(f"{type(exc).__name__}: {exc}")

        if result is None:
            return HandlerResult.done()
        if result.status is HandlerStatus.FAILED:
            log_warning(
                logger,
                "Handler %s reported failure in %s stage for %s: %s",
                name,
                stage,
                context.event.kind,
                result.detail,
            )
        return result
