"""Shared utilities used across bountybot packages."""
