"""Tracker provider implementations."""

from prlink.workitem.providers.asana import AsanaProvider

__all__ = ["AsanaProvider"]
