"""Podkeeper core package - exceptions and the user settings layer."""
