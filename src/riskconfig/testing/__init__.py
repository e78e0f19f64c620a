"""Testing utilities for the Risk Configuration service."""

from .mocks import FakeClock

__all__ = ["FakeClock"]
