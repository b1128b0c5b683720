"""Core - configuration, engine, registry, identity and errors."""
