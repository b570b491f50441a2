"""Render Fluent Bit configuration text from input, filter, output and parser resources."""

__version__ = "0.1.0"
__all__ = ["config", "outputs", "resource", "sections"]