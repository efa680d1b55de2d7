"""Shared pytest configuration."""
pytest_plugins = ["lexscope.testing.fixtures"]
