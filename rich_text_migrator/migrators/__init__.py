"""
Kontent.ai API migrators and helpers.

This subpackage provides the Management API client used to upload
binary files, register them as assets, create content items and write
their rich text.  It encapsulates rate limiting, automatic retries and
the translation of transport failures into the migrator's error types.
"""

from .kontent_migrator import ManagementClient, RateLimiter, kontent_headers, retry_after_seconds, with_retries

__all__ = ["ManagementClient", "RateLimiter", "kontent_headers", "retry_after_seconds", "with_retries"]
