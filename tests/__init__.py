"""Podkeeper test package."""
