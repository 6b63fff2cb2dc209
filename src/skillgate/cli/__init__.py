"""Command line interface for skillgate."""
