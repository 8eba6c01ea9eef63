"""Lookup tables used by the normalizer and scorers."""
