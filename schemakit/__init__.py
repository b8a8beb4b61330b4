"""JSON Schema model, JSON/YAML parsing, reference loading and related helpers."""

__version__ = "0.1.0"