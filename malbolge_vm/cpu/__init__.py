"""Malbolge CPU: registers, ternary ALU and instruction decoder."""
