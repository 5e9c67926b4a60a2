"""Application commands."""

from .agent_commands import ProfilePictureUpload

__all__ = ["ProfilePictureUpload"]
