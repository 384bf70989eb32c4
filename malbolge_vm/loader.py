"""
Malbolge VM - Program Loader / Validator

Turns source text into a fully initialised memory image:

  1. Skip whitespace. Every other byte is copied to the next free cell.
  2. Printable bytes must decode (at the address they will be stored at)
     to one of the eight valid opcodes, otherwise the program is rejected.
  3. At least two cells must be written, and no more than fit in memory.
  4. The rest of memory is filled with crazy_op(mem[n-1], mem[n-2]).

The offset reported for an invalid character is its position in the
original source, counting whitespace, not the cell address.
"""

import logging
from typing import Union

from .cpu.alu import crazy_op
from .cpu.decoder import is_printable, is_valid_instruction
from .mem.memory import Memory, MEMORY_SIZE

log = logging.getLogger('malbolge.loader')

# Byte values treated as whitespace: ASCII \t \n \v \f \r and space, plus
# NEL (0x85) and NBSP (0xA0) from Latin-1.
WHITESPACE = frozenset((0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0x85, 0xA0))

MIN_PROGRAM_LENGTH = 2


class LoadError(Exception):
    """Raised when a source program cannot be loaded into memory."""


class InvalidCharacterError(LoadError):
    """A source character does not decode to a valid instruction."""
    def __init__(self, char: str, offset: int):
        self.char = char
        self.offset = offset
        super().__init__(
            f"Invalid character in source program: '{char}' "
            f"at location: 0x{offset:X}")


class SourceTooShortError(LoadError):
    def __init__(self):
        super().__init__("Source program is too short.")


class SourceTooLongError(LoadError):
    def __init__(self):
        super().__init__("Source program is too long.")


def load(source: Union[bytes, bytearray, str]) -> Memory:
    """Validate source and return the initialised memory image.

    Args:
        source: Program text. A str is encoded as latin-1, one byte per
                character.

    Raises:
        InvalidCharacterError: a printable character decodes to a non-opcode
        SourceTooShortError:   fewer than two non-whitespace bytes
        SourceTooLongError:    more non-whitespace bytes than memory cells
    """
    if isinstance(source, str):
        source = source.encode('latin-1')

    cells = bytearray()

    for offset, b in enumerate(source):
        if b in WHITESPACE:
            continue

        if is_printable(b) and not is_valid_instruction(b, len(cells)):
            raise InvalidCharacterError(chr(b), offset)

        if len(cells) >= MEMORY_SIZE:
            raise SourceTooLongError()

        cells.append(b)

    if len(cells) < MIN_PROGRAM_LENGTH:
        raise SourceTooShortError()

    log.debug("Loaded %d program cells from %d source bytes",
              len(cells), len(source))

    mem = Memory()
    mem.load_binary(cells)
    _fill(mem, len(cells))
    return mem


def _fill(mem: Memory, start: int):
    """Fill cells start..59048 from the two cells before each one."""
    prev2 = mem.read(start - 2)
    prev1 = mem.read(start - 1)
    for n in range(start, MEMORY_SIZE):
        value = crazy_op(prev1, prev2)
        mem.write(n, value)
        prev2, prev1 = prev1, value
    log.debug("Filled cells %d..%d", start, MEMORY_SIZE - 1)
