"""Bundled calendar definitions (TOML)."""
