"""Errors raised by the rating engine."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """A rating call violated one of its preconditions.

    Permanent for the given inputs; callers surface it as a rejected operation.
    """


__all__ = ["InvalidInputError"]
