"""Storage for exported quotes."""

from healthquote.storage.json_writer import QuoteExportWriter

__all__ = ["QuoteExportWriter"]
