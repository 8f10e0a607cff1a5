"""Configuration, logging, error types and shared validation helpers."""
