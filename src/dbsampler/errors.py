"""Exceptions raised by discovery and sampling."""

from __future__ import annotations


class SamplerError(Exception):
    """Base class for database sampling errors."""


class DatabaseConnectionError(SamplerError, ConnectionError):
    """Tables could not be enumerated (permissions, connectivity, bad result)."""


class QueryError(SamplerError):
    """The sampling query failed (missing table, bad identifier, syntax)."""


class ScanError(SamplerError):
    """A result row could not be fetched or one of its values normalized."""


class CapabilityCheckError(SamplerError):
    """The PostgreSQL extension probe failed."""
