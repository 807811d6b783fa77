"""Bountybot HTTP API layer.

Usage
-----
Create the application::

    from bountybot.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # health plus the webhook endpoint
"""

from bountybot.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
