"""Adapters – concrete grant store backends (import submodules explicitly)."""
