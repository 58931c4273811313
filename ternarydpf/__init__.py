"""Distributed point functions over ternary and base-k trees, with full-domain evaluation."""

__version__ = "0.1.0"
__all__ = ["utils", "prf", "extensions", "dpf", "halfdpf", "cli"]