"""Knucklebones engine package root."""
