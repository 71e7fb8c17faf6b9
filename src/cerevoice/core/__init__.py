"""
Core Infrastructure for cerevoice-client.

This package provides foundational components:
    - config.py: Defaults, YAML settings, ClientConfig
    - logging/: Structured logging with numeric levels
"""
