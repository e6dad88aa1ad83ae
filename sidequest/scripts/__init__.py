"""Maintenance scripts (run with python -m sidequest.scripts.<name>)."""
