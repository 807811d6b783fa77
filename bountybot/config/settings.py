"""Process-level settings read from the environment.

Usage
-----
>>> import os
>>> os.environ["BOUNTYBOT_DATABASE_URL"] = "sqlite+aiosqlite:///bot.db"
>>> settings = BotSettings.from_env()
>>> settings.database_url
'sqlite+aiosqlite:///bot.db'

"""

from __future__ import annotations

import dataclasses as dc
import os
from pathlib import Path

from bountybot.common.slug import parse_repo_slug


@dc.dataclass(frozen=True, slots=True)
class BotSettings:
    """Deployment settings for the webhook runtime.

    Attributes
    ----------
    database_url
        SQLAlchemy async URL. When ``None`` the runtime serves health
        endpoints only.
    config_path
        Optional YAML file holding label tiers and assignment settings.
        When ``None`` the default configuration is used.
    repo_owner, repo_name
        Repository the bot comments on, parsed from ``BOUNTYBOT_REPOSITORY``.
    github_token
        Token used for tracker API calls.
    webhook_secret
        Shared secret for delivery signatures. When ``None`` signatures are
        not checked.

    """

    database_url: str | None = None
    config_path: Path | None = None
    repo_owner: str | None = None
    repo_name: str | None = None
    github_token: str | None = None
    webhook_secret: str | None = None

    @classmethod
    def from_env(cls) -> BotSettings:
        """Create settings from ``BOUNTYBOT_*`` environment variables.

        Raises
        ------
        ValueError
            If ``BOUNTYBOT_REPOSITORY`` is set but is not an ``owner/name`` slug.

        """
        database_url = os.environ.get("BOUNTYBOT_DATABASE_URL", "").strip() or None

        config_path: Path | None = None
        raw_config_path = os.environ.get("BOUNTYBOT_CONFIG_PATH", "").strip()
        if raw_config_path:
            config_path = Path(raw_config_path)

        repo_owner: str | None = None
        repo_name: str | None = None
        raw_repo = os.environ.get("BOUNTYBOT_REPOSITORY", "").strip()
        if raw_repo:
            repo_owner, repo_name = parse_repo_slug(raw_repo)

        github_token = os.environ.get("BOUNTYBOT_GITHUB_TOKEN", "").strip() or None
        webhook_secret = os.environ.get("BOUNTYBOT_WEBHOOK_SECRET", "").strip() or None

        return cls(
            database_url=database_url,
            config_path=config_path,
            repo_owner=repo_owner,
            repo_name=repo_name,
            github_token=github_token,
            webhook_secret=webhook_secret,
        )
