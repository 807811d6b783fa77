"""GitHub REST client used by pipeline handlers."""

from __future__ import annotations

import dataclasses
import typing as typ
from http import HTTPStatus
from urllib.parse import quote

import httpx
import msgspec

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import UserProfile


class TrackerClient(typ.Protocol):
    """Tracker capabilities consumed by handlers."""

    async def post_comment(self, issue_number: int, body: str) -> None:
        """Post a comment on an issue."""
        ...

    async def add_labels(self, issue_number: int, labels: typ.Sequence[str]) -> None:
        """Add labels to an issue, leaving existing labels in place."""
        ...

    async def remove_label(self, issue_number: int, label: str) -> None:
        """Remove one label from an issue."""
        ...

    async def get_user_profile(self, login: str) -> UserProfile:
        """Fetch a user's public profile."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRestConfig:
    """Configuration for the GitHub REST API client."""

    token: str
    owner: str
    repo: str
    api_url: str = "https://api.github.com"
    timeout_s: float = 20.0
    user_agent: str = "bountybot/0.1"


_HTTP_ERROR_STATUS_THRESHOLD = 400


class GitHubRestClient:
    """GitHub REST implementation of :class:`TrackerClient`."""

    def __init__(
        self,
        config: GitHubRestConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.token}",
                "User-Agent": config.user_agent,
                "Accept": "application/vnd.github+json",
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str) -> str:
        return f"{self._config.api_url.rstrip('/')}{path}"

    def _issue_path(self, issue_number: int, suffix: str) -> str:
        return (
            f"/repos/{self._config.owner}/{self._config.repo}"
            f"/issues/{issue_number}/{suffix}"
        )

    async def post_comment(self, issue_number: int, body: str) -> None:
        """Post ``body`` as a new comment on the issue."""
        await self._request(
            "POST", self._issue_path(issue_number, "comments"), json={"body": body}
        )

    async def add_labels(self, issue_number: int, labels: typ.Sequence[str]) -> None:
        """Add ``labels`` to the issue."""
        if not labels:
            return
        await self._request(
            "POST",
            self._issue_path(issue_number, "labels"),
            json={"labels": list(labels)},
        )

    async def remove_label(self, issue_number: int, label: str) -> None:
        """Remove ``label`` from the issue; a missing label is not an error."""
        path = self._issue_path(issue_number, f"labels/{quote(label, safe='')}")
        response = await self._client.request("DELETE", self._url(path))
        if (
            response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD
            and response.status_code != HTTPStatus.NOT_FOUND
        ):
            raise GitHubAPIError.http_error("DELETE", path, response.status_code)

    async def get_user_profile(self, login: str) -> UserProfile:
        """Fetch and decode ``GET /users/{login}``."""
        response = await self._request("GET", f"/users/{login}")
        try:
            return msgspec.convert(response.json(), type=UserProfile)
        except msgspec.ValidationError as exc:
            raise GitHubResponseShapeError.invalid(f"user {login}", exc) from exc

    async def _request(
        self, method: str, path: str, *, json: object | None = None
    ) -> httpx.Response:
        """Send a request and raise :class:`GitHubAPIError` on error statuses."""
        response = await self._client.request(method, self._url(path), json=json)
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(method, path, response.status_code)
        return response
