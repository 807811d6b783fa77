"""GitHub bounty bot: label-driven deadlines, pricing and issue analytics."""

from __future__ import annotations

__version__ = "0.1.0"
