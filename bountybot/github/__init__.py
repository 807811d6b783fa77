"""GitHub tracker client and webhook payload models."""

from __future__ import annotations

from .client import GitHubRestClient, GitHubRestConfig, TrackerClient
from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import (
    UNKNOWN_LABEL,
    Comment,
    GitHubUser,
    Issue,
    UserProfile,
    WebhookPayload,
    decode_payload,
    label_name,
    label_names,
)

__all__ = [
    "UNKNOWN_LABEL",
    "Comment",
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubResponseShapeError",
    "GitHubRestClient",
    "GitHubRestConfig",
    "GitHubUser",
    "Issue",
    "TrackerClient",
    "UserProfile",
    "WebhookPayload",
    "decode_payload",
    "label_name",
    "label_names",
]
