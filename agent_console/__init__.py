"""Agent Console - platform-admin backend for tenant agent definitions and overrides."""

__version__ = "1.0.0"
