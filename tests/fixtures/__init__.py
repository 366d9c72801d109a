"""Pytest fixture modules loaded through pytest_plugins."""
