"""Bundled simulation defaults (default.yaml)."""
