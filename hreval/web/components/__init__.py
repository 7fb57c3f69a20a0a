"""Shared UI widgets: badges, grade selector, subject cards."""
