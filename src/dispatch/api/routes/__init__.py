"""Route group exports."""

from . import dispatch, health, jobs, routes

__all__ = ["dispatch", "health", "jobs", "routes"]
