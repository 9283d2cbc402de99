"""Bedrock runtime provider adapter with a streaming event decoder."""

__version__ = "0.1.0"
