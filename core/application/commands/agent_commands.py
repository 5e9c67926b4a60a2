"""
Agent commands.

Commands for starting agent creation.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ProfilePictureUpload:
    """Profile picture sent along with a creation request."""

    filename: str
    content: bytes
