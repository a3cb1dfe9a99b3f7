"""Workflow Sync.

A REST service over a single workflows table plus the client view that keeps
a cached copy of that list in step with it.
"""

__version__ = "1.0.0"
