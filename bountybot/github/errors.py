"""GitHub tracker API errors."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when GitHub returns an error response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, method: str, path: str, status_code: int) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"GitHub REST {method} {path} returned HTTP {status_code}",
            status_code=status_code,
        )


class GitHubResponseShapeError(RuntimeError):
    """Raised when GitHub responses do not decode into the expected model."""

    @classmethod
    def invalid(cls, what: str, detail: object) -> GitHubResponseShapeError:
        """Return an error for an undecodable response body."""
        return cls(f"GitHub response for {what} has unexpected shape: {detail}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when no GitHub token is configured."""
        return cls("BOUNTYBOT_GITHUB_TOKEN is required for GitHub API")

    @classmethod
    def missing_repository(cls) -> GitHubConfigError:
        """Return an error when no repository slug is configured."""
        return cls("BOUNTYBOT_REPOSITORY is required for GitHub API")

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")
