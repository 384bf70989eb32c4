"""
Malbolge VM - Ternary ALU Operations

Both operations treat a cell as a 10-trit unsigned number in the range
[0, 59048] (3^10 - 1). They are pure functions: no registers, no memory,
no flags. Callers guarantee the operands are in range.

  crazy_op     The tritwise "crazy" operation used by the `p` opcode and by
               the loader to fill memory past the end of the program.
  tri_rotate   Rotate right by one trit, used by the `*` opcode.

crazy_op is evaluated two trits at a time: each operand is split into five
base-9 digits (weights 1, 9, 81, 729, 6561), and each digit pair is looked
up in a 9x9 table whose entries are themselves base-9 digits. This is the
same as applying the 3x3 trit table ten times, with half the lookups.

Trit table (row = y trit, column = x trit):

        x=0  x=1  x=2
  y=0    1    0    0
  y=1    1    0    2
  y=2    2    2    1
"""

TRITS = 10
MAX_VALUE = 3 ** TRITS - 1        # 59048
TOP_TRIT = 3 ** (TRITS - 1)       # 19683

# Base-9 digit weights, one per trit pair
P9 = (1, 9, 81, 729, 6561)

# Row = y digit, column = x digit (base 9)
CRAZY_TABLE = (
    (4, 3, 3, 1, 0, 0, 1, 0, 0),
    (4, 3, 5, 1, 0, 2, 1, 0, 2),
    (5, 5, 4, 2, 2, 1, 2, 2, 1),
    (4, 3, 3, 1, 0, 0, 7, 6, 6),
    (4, 3, 5, 1, 0, 2, 7, 6, 8),
    (5, 5, 4, 2, 2, 1, 8, 8, 7),
    (7, 6, 6, 7, 6, 6, 4, 3, 3),
    (7, 6, 8, 7, 6, 8, 4, 3, 5),
    (8, 8, 7, 8, 8, 7, 5, 5, 4),
)


def crazy_op(x: int, y: int) -> int:
    """Tritwise crazy operation of x (A register side) and y (memory side).

    Argument order matters: the operation is not commutative.
    crazy_op(0, 59048) == 59048 but crazy_op(59048, 0) == 0.
    """
    result = 0
    for weight in P9:
        result += CRAZY_TABLE[y // weight % 9][x // weight % 9] * weight
    return result


def tri_rotate(x: int) -> int:
    """Rotate right one trit: the lowest trit wraps to the top (3^9)."""
    q, r = divmod(x, 3)
    return q + r * TOP_TRIT


def to_ternary(x: int) -> str:
    """Render a cell as 10 trits, most significant first (e.g. '0000000012')."""
    digits = []
    for _ in range(TRITS):
        x, r = divmod(x, 3)
        digits.append(str(r))
    return ''.join(reversed(digits))
