"""Headless command-line driver."""
