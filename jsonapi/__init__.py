"""Schemas, soft resources, URL parsing and payload reading for JSON:API."""

__version__ = "0.1.0"

__all__ = ["errors", "resource", "schema", "simple_url", "soft_collection", "soft_resource", "types"]