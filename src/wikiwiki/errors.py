from __future__ import annotations


class WikiwikiError(Exception):
    """Base class for wikiwiki errors."""


class NotFoundError(WikiwikiError):
    """No searchable or resolvable candidate exists for a query."""

    def __init__(self, query: str, message: str | None = None):
        self.query = query
        super().__init__(message or f'No result found for "{query}"')


class EnrichmentFailure(WikiwikiError):
    """A single provider enrichment failed. Logged and absorbed, never raised to callers."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider} enrichment failed: {reason}")


class BatchLookupFailure(WikiwikiError):
    """The batched label lookup for graph nodes failed."""
