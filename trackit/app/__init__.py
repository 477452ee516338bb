"""Carrier-agnostic models, formatting and presentation pipeline."""
