"""Stateless helpers: geographic distance, category and query classification."""
