"""Ports of the core.

Adapters implement these Protocols; the core only depends on the contracts.
"""

from yammer.core.interfaces.fetcher import DocumentFetcher
from yammer.core.interfaces.parser import DocumentParser

__all__ = ["DocumentFetcher", "DocumentParser"]
