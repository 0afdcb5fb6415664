"""Configuration and data models for mdbook-external-links."""
