"""
Decoder tests - translation table integrity and position-dependent decode.
"""

from malbolge_vm.cpu.decoder import (
    XLAT1, XLAT2, VALID_OPCODES,
    decode_opcode, is_printable, is_valid_instruction, mutate,
)


class TestTables:

    def test_sizes(self):
        assert len(XLAT1) == 94
        assert len(XLAT2) == 94

    def test_all_entries_printable(self):
        assert all(is_printable(ord(ch)) for ch in XLAT1)
        assert all(is_printable(ord(ch)) for ch in XLAT2)

    def test_mutate_table_is_permutation(self):
        assert sorted(XLAT2) == [chr(b) for b in range(33, 127)]

    def test_opcode_positions(self):
        positions = {op: XLAT1.index(op) for op in VALID_OPCODES}
        assert positions == {
            'j': 7, 'i': 65, '*': 6, 'p': 29,
            '<': 66, '/': 84, 'v': 48, 'o': 35,
        }

    def test_table_ends(self):
        assert XLAT1[:8] == '+b(29e*j'
        assert XLAT1[-8:] == 't:Pn6^Ha'
        assert XLAT2[:8] == '5z]&gqty'
        assert XLAT2[-8:] == 'N:#?G"i@'


class TestDecode:

    def test_printable_range(self):
        assert not is_printable(32)
        assert is_printable(33)
        assert is_printable(126)
        assert not is_printable(127)
        assert not is_printable(0)

    def test_position_dependent(self):
        """The same byte decodes differently at different addresses."""
        assert decode_opcode(ord('('), 0) == 'j'
        assert decode_opcode(ord('('), 1) == '1'
        assert decode_opcode(ord("'"), 1) == 'j'

    def test_address_wraps_mod_94(self):
        assert decode_opcode(ord('b'), 0) == decode_opcode(ord('b'), 94)
        assert decode_opcode(ord('b'), 5) == decode_opcode(ord('b'), 5 + 94 * 600)

    def test_valid_instruction(self):
        assert is_valid_instruction(ord('('), 0)
        assert not is_valid_instruction(ord('j'), 0)
        assert not is_valid_instruction(ord('!'), 0)   # decodes to '+'

    def test_mutate(self):
        assert mutate(33) == ord('5')
        assert mutate(ord('(')) == ord('y')
        assert mutate(126) == ord('@')
