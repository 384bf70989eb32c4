"""
Malbolge VM - Instruction Decoder / Translation Tables

Malbolge instructions are position dependent. The opcode executed for a cell
is looked up with both the cell value and its address:

    opcode = XLAT1[(mem[c] - 33 + c) % 94]

so the same byte means different things at different addresses. After an
instruction executes, the cell is rewritten with a value from the second
table, indexed by the cell value alone:

    mem[c] = XLAT2[mem[c] - 33]

Only cells holding a printable ASCII value (33..126) can be decoded or
mutated. Fetching any other value halts the machine.

Opcode characters:
  j   jump-D      D = mem[D]
  i   jump-C      C = mem[D]
  *   rotate      A = mem[D] = tri_rotate(mem[D])
  p   crazy-op    A = mem[D] = crazy_op(A, mem[D])
  <   output      write A & 0xFF
  /   input       A = next input byte (59048 at end of input)
  v   stop        halt without mutating
  o   nop

Every other decoded character is also a no-op at run time, but the loader
only accepts source characters that decode to one of the eight above.
"""

# ──────────────────────────────────────────────
# Translation tables (indices 0..93 ↔ bytes 33..126)
# ──────────────────────────────────────────────

XLAT1 = ('+b(29e*j1VMEKLyC})8&m#~W>qxdRp0wkrUo[D7,XTcA"lI'
         ".v%{gJh4G\\-=O@5`_3i<?Z';FNQuY]szf$!BS/|t:Pn6^Ha")

XLAT2 = ("5z]&gqtyfr$(we4{WP)H-Zn,[%\\3dL+Q;>U!pJS72FhOA1C"
         'B6v^=I_0/8|jsb9m<.TVac`uY*MK\'X~xDl}REokN:#?G"i@')

PRINTABLE_MIN = 33    # '!'
PRINTABLE_MAX = 126   # '~'
TABLE_SIZE = PRINTABLE_MAX - PRINTABLE_MIN + 1  # 94

# ──────────────────────────────────────────────
# Opcodes
# ──────────────────────────────────────────────

OP_JMP_D  = 'j'
OP_JMP_C  = 'i'
OP_ROT    = '*'
OP_CRAZY  = 'p'
OP_OUT    = '<'
OP_IN     = '/'
OP_STOP   = 'v'
OP_NOP    = 'o'

VALID_OPCODES = frozenset(
    (OP_JMP_D, OP_JMP_C, OP_ROT, OP_CRAZY, OP_OUT, OP_IN, OP_STOP, OP_NOP))


def is_printable(value: int) -> bool:
    """True if value can be decoded (33..126)."""
    return PRINTABLE_MIN <= value <= PRINTABLE_MAX


def decode_opcode(value: int, addr: int) -> str:
    """Decode the cell value found at addr into an opcode character.

    The caller must check is_printable(value) first. The returned character
    may be outside VALID_OPCODES, in which case it executes as a no-op.
    """
    return XLAT1[(value - PRINTABLE_MIN + addr) % TABLE_SIZE]


def is_valid_instruction(value: int, addr: int) -> bool:
    """True if a printable value at addr decodes to one of the eight opcodes."""
    return decode_opcode(value, addr) in VALID_OPCODES


def mutate(value: int) -> int:
    """Replacement value for a printable cell after it has executed."""
    return ord(XLAT2[value - PRINTABLE_MIN])
