"""Core layer - configuration, cache, registry and errors."""
