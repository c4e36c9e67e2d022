"""Shared domain and infrastructure building blocks."""
