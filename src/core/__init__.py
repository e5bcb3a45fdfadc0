# File: src/core/__init__.py
"""Core controller package: state owner and process entry point."""
