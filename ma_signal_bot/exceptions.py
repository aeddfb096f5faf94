"""Exceptions raised by the signal bot."""

from __future__ import annotations


class FeedError(Exception):
    """Price feed could not produce a usable sample for this tick."""
