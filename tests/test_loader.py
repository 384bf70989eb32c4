"""
Loader tests - validation, error reporting and memory fill.
"""

import pytest

from malbolge_vm.cpu.alu import crazy_op
from malbolge_vm.loader import (
    load, LoadError, InvalidCharacterError,
    SourceTooShortError, SourceTooLongError,
)
from malbolge_vm.mem.memory import MEMORY_SIZE


def _nop_program(length: int) -> bytes:
    """Source of `length` cells that all decode to 'o' at their address."""
    return bytes(33 + (35 - i) % 94 for i in range(length))


class TestValidation:

    @pytest.mark.parametrize("source", [b"", b"(", b"  ( \n", b"\t\r\n "])
    def test_too_short(self, source):
        with pytest.raises(SourceTooShortError) as exc:
            load(source)
        assert str(exc.value) == "Source program is too short."

    def test_invalid_first_character(self):
        with pytest.raises(InvalidCharacterError) as exc:
            load(b"jj")
        assert exc.value.char == 'j'
        assert exc.value.offset == 0
        assert str(exc.value) == (
            "Invalid character in source program: 'j' at location: 0x0")

    def test_offset_counts_whitespace(self):
        """Offset is the source position, not the cell address."""
        with pytest.raises(InvalidCharacterError) as exc:
            load(b"  \n(x")
        assert exc.value.char == 'x'
        assert exc.value.offset == 4

    def test_offset_formatted_as_hex(self):
        with pytest.raises(InvalidCharacterError) as exc:
            load(b" " * 26 + b"jj")
        assert exc.value.offset == 26
        assert str(exc.value).endswith("at location: 0x1A")

    def test_errors_share_base_class(self):
        for exc_type in (InvalidCharacterError, SourceTooShortError,
                         SourceTooLongError):
            assert issubclass(exc_type, LoadError)

    def test_too_long(self):
        with pytest.raises(SourceTooLongError) as exc:
            load(_nop_program(MEMORY_SIZE + 1))
        assert str(exc.value) == "Source program is too long."

    def test_exactly_full_memory(self):
        source = _nop_program(MEMORY_SIZE)
        mem = load(source)
        assert mem.read(0) == source[0]
        assert mem.read(MEMORY_SIZE - 1) == source[-1]

    def test_whitespace_not_stored(self):
        mem = load(b"(\x85\xa0 \t&")
        assert mem.read(0) == ord('(')
        assert mem.read(1) == ord('&')

    def test_non_printable_stored_unchecked(self):
        mem = load(b"(\x01a")
        assert mem.read(0) == ord('(')
        assert mem.read(1) == 0x01
        assert mem.read(2) == ord('a')

    def test_str_source(self):
        assert load("Db").snapshot(0, 1) == (68, 98)


class TestFill:

    def test_two_byte_program(self):
        mem = load(b"Db")
        assert mem.snapshot(0, 7) == (68, 98, 29464, 95, 29465, 97, 29462, 98)

    def test_fill_recurrence(self):
        mem = load(b"Db")
        for n in range(2, MEMORY_SIZE):
            assert mem.read(n) == crazy_op(mem.read(n - 1), mem.read(n - 2))

    def test_fill_starts_after_program(self):
        mem = load(b" D\nb ")
        assert mem.read(2) == crazy_op(ord('b'), ord('D'))

    def test_deterministic(self):
        source = b"(=<`#9]~6ZY32Vx/4Rs+0No-&Jk)\"Fh}|Bcy?`=*z]Kw%oG4UUS0/@-ejc(:'8dc"
        assert load(source).snapshot() == load(source).snapshot()

    def test_size(self):
        mem = load(b"Db")
        assert len(mem) == MEMORY_SIZE == 59049
        assert len(mem.snapshot()) == MEMORY_SIZE
