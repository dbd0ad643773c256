"""Stored models package."""

from labyrinth.models.session import SessionRecord

__all__ = ["SessionRecord"]
