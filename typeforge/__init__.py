"""Infer statically-typed schemas from sample JSON, YAML and CSV data."""

__version__ = "0.1.0"
