"""docsearch-client - Source Package.

HTTP client for a document-search service: typed requests, blocking or
asyncio dispatch, round-robin node selection and response classification.
"""

__all__ = ["clients", "core", "models", "observability", "parsing"]
