"""Malbolge peripherals."""
