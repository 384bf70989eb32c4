"""Malbolge memory image."""
