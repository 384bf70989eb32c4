"""
Malbolge VM - CPU Register Set

Register model:
  A   - accumulator (data register), one 10-trit cell value
  C   - code pointer, address of the instruction to fetch
  D   - data pointer, address of the operand cell

All three start at 0. C and D both advance by one (mod 59049) after every
executed instruction, so code and data walk through memory in lockstep
unless a jump moves one of them.
"""

from .alu import to_ternary


class Registers:
    """Malbolge register set plus an executed-instruction counter."""

    __slots__ = ('A', 'C', 'D', 'cycles')

    def __init__(self):
        self.A: int = 0       # Accumulator
        self.C: int = 0       # Code pointer
        self.D: int = 0       # Data pointer
        self.cycles: int = 0  # Instructions executed

    def display(self) -> str:
        """Format register state for log messages."""
        return (f"C={self.C:05d} D={self.D:05d} "
                f"A={self.A:05d} [{to_ternary(self.A)}] cycles={self.cycles}")

    def reset(self):
        """Reset to the start-of-execution state."""
        self.A = 0
        self.C = 0
        self.D = 0
        self.cycles = 0
