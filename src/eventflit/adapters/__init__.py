"""Adapters – third-party integrations."""
