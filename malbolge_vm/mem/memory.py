"""
Malbolge VM - Flat Ternary Memory

59049 (3^10) cells, each holding one 10-trit value in [0, 59048].
There are no regions, no I/O mapping and no write protection: the program,
its data and the loader's filler all share one address space, and every
executed cell rewrites itself.

Addresses wrap modulo 59049 on every access.
"""

from array import array
from typing import Iterable, Tuple

MEMORY_SIZE = 3 ** 10   # 59049 cells


class Memory:
    """Fixed-size cell store.

    Backed by an unsigned 16-bit array, which holds every 10-trit value
    (max 59048) in two bytes per cell.
    """

    def __init__(self):
        self._mem = array('H', bytes(2 * MEMORY_SIZE))

    def __len__(self) -> int:
        return MEMORY_SIZE

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        """Read the cell at addr."""
        return self._mem[addr % MEMORY_SIZE]

    def write(self, addr: int, value: int):
        """Write value into the cell at addr."""
        self._mem[addr % MEMORY_SIZE] = value

    # --- Bulk load ---

    def load_binary(self, data: Iterable[int]):
        """Copy raw cell values into memory starting at address 0."""
        for i, value in enumerate(data):
            self._mem[i % MEMORY_SIZE] = value

    # --- Snapshots ---

    def snapshot(self, start: int = 0, end: int = MEMORY_SIZE - 1) -> Tuple[int, ...]:
        """Copy of cells start..end (inclusive), for comparing memory images."""
        return tuple(self._mem[start:end + 1])
