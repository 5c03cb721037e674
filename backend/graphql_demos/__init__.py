"""GraphQL function demos — BookStore and ByteDefence services."""

__version__ = "1.0.0"
