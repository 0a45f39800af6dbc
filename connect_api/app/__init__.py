"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, database, security,
errors), ``schemas`` (pydantic payloads), ``services`` (business
logic) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
