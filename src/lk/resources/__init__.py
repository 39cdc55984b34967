"""Bundled resources for lk."""
