"""Podkeeper API package."""
