"""I/O utilities for the DynamoDB JSON transformer."""

from .output_writer import OutputWriter

__all__ = ["OutputWriter"]
