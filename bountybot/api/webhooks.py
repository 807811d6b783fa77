"""Webhook delivery endpoint.

``POST /webhooks`` accepts GitHub deliveries, verifies the optional
signature, decodes the body into an :class:`~bountybot.pipeline.Event` and
runs it through the pipeline executor before answering.
"""

from __future__ import annotations

import hashlib
import hmac
import typing as typ

import falcon
import msgspec

from bountybot.api.errors import InvalidInputError, InvalidSignatureError
from bountybot.logging import get_logger, log_info
from bountybot.pipeline.models import Event

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from bountybot.pipeline.executor import InvocationReport, PipelineExecutor

__all__ = [
    "EVENT_HEADER",
    "SIGNATURE_HEADER",
    "WebhookResource",
    "sign_payload",
    "verify_signature",
]

EVENT_HEADER = "X-GitHub-Event"
SIGNATURE_HEADER = "X-Hub-Signature-256"
_SIGNATURE_PREFIX = "sha256="

logger = get_logger(__name__)


def sign_payload(secret: str, body: bytes) -> str:
    """Return the ``X-Hub-Signature-256`` value for ``body``."""
    digest = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return f"{_SIGNATURE_PREFIX}{digest}"


def verify_signature(secret: str, body: bytes, signature: str | None) -> None:
    """Raise :class:`InvalidSignatureError` unless ``signature`` signs ``body``."""
    if not signature:
        raise InvalidSignatureError.missing()
    if not hmac.compare_digest(sign_payload(secret, body), signature.strip()):
        raise InvalidSignatureError.mismatch()


def _summarize(report: InvocationReport) -> dict[str, typ.Any]:
    return {
        "kind": report.kind,
        "routed": report.routed,
        "states": [str(state) for state in report.states],
        "handlers": [
            {
                "stage": str(record.stage),
                "handler": record.handler,
                "status": str(record.result.status),
                "detail": record.result.detail,
            }
            for record in report.handlers
        ],
    }


class WebhookResource:
    """Resource turning webhook deliveries into pipeline invocations.

    Parameters
    ----------
    executor
        Executor that runs each decoded event.
    secret
        Shared webhook secret. When ``None`` signatures are not checked.

    """

    def __init__(
        self, executor: PipelineExecutor, *, secret: str | None = None
    ) -> None:
        """Store the executor and optional signing secret."""
        self._executor = executor
        self._secret = secret

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle POST /webhooks.

        Responds ``202 Accepted`` once the invocation has completed; the
        body summarises every stage and handler result. Handler failures
        are reported in the summary, never as an error status.
        """
        event_name = req.get_header(EVENT_HEADER)
        if not event_name:
            raise InvalidInputError("header is required", field=EVENT_HEADER)

        body = await req.stream.read()
        if self._secret is not None:
            verify_signature(self._secret, body, req.get_header(SIGNATURE_HEADER))

        try:
            event = Event.from_webhook(event_name, msgspec.json.decode(body))
        except msgspec.DecodeError as exc:
            raise InvalidInputError(f"malformed JSON body: {exc}") from exc
        except msgspec.ValidationError as exc:
            raise InvalidInputError(f"unexpected payload shape: {exc}") from exc

        log_info(logger, "Received %s delivery", event.kind)
        report = await self._executor.run(event)
        resp.media = _summarize(report)
        resp.status = falcon.HTTP_202
