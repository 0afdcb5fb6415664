"""Command line interface for mdbook-external-links."""
