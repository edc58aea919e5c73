"""AI-assisted Laravel migration and validation rule scaffolding."""

__version__ = "0.1.0"
