"""Configuration, security primitives and error types."""
