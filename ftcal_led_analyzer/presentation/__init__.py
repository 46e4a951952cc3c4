"""Rendering of the numeric series produced by the analysis layer (matplotlib)."""
