"""odtctl — dated OpenDocument Text scaffolding CLI."""

__version__ = "0.3.0"
