"""Entropy measures, tensor algebra, losses, field and orbital models, and text diffs."""

__version__ = "0.1.0"