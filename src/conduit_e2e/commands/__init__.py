"""Named multi-step flows shared by every test."""

from conduit_e2e.commands.library import CommandLibrary, command, slug_from_url

__all__ = ["CommandLibrary", "command", "slug_from_url"]
