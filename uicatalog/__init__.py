"""uicatalog: front-end project conventions for AI coding agents."""

__version__ = "0.1.0"
