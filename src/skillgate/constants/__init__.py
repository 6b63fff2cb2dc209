"""Constant modules for skillgate."""
