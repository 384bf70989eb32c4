"""
Malbolge VM - Main Emulator Class

Integrates:
  - CPU registers (cpu/regs.py)
  - Memory image (mem/memory.py, built by loader.py)
  - Instruction decoder (cpu/decoder.py)
  - Ternary ALU (cpu/alu.py)
  - Console I/O port (periph/console.py)

Execution model, one instruction per step():
  1. Fetch mem[C]; a value outside 33..126 halts the machine
  2. Decode with XLAT1 at (mem[C] - 33 + C) % 94
  3. Execute the handler → update A, C, D and memory
  4. Rewrite mem[C] with XLAT2 (the cell C points at after step 3)
  5. Advance C and D by one, modulo 59049

Termination reasons:
  - HALT:  fetched a non-printable cell
  - STOP:  executed the `v` instruction (no mutation, no advance)

There is no cycle limit: a program that never halts runs forever.
"""

import logging
from enum import Enum
from typing import Optional, Union

from .cpu.regs import Registers
from .cpu.decoder import (
    decode_opcode, is_printable, mutate,
    OP_JMP_D, OP_JMP_C, OP_ROT, OP_CRAZY, OP_OUT, OP_IN, OP_STOP, OP_NOP,
)
from .cpu.alu import crazy_op, tri_rotate
from .mem.memory import Memory, MEMORY_SIZE
from .periph.console import ConsolePort
from .loader import load

log = logging.getLogger('malbolge.emu')

# A after reading past the end of input
EOF_VALUE = MEMORY_SIZE - 1


class StopReason(Enum):
    HALT = 'HALT'
    STOP = 'STOP'


class VMIOError(Exception):
    """The console input stream failed with something other than EOF."""
    def __init__(self, message: str, addr: int):
        self.addr = addr
        super().__init__(message)


class MalbolgeVM:
    """Malbolge virtual machine.

    Usage:
        vm = MalbolgeVM()
        vm.load(source)
        vm.run()
        print(vm.console.output)  # b"Hello World!"

    Pass a ConsolePort built on real streams to talk to stdin/stdout
    instead of the in-memory buffers.
    """

    def __init__(self, mem: Optional[Memory] = None,
                 console: Optional[ConsolePort] = None):
        self.regs = Registers()
        self.mem = mem if mem is not None else Memory()
        self.console = console if console is not None else ConsolePort()

        # Opcode character → handler
        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load(self, source: Union[bytes, bytearray, str]):
        """Validate and load a source program, resetting the registers.

        Raises LoadError (see loader.py) if the program is rejected; the
        current memory image is left untouched in that case.
        """
        self.mem = load(source)
        self.regs.reset()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction. Returns StopReason if stopped, else None."""
        regs = self.regs
        value = self.mem.read(regs.C)

        if not is_printable(value):
            return StopReason.HALT

        op = decode_opcode(value, regs.C)
        regs.cycles += 1

        handler = self._dispatch.get(op)
        if handler is not None:
            try:
                handler()
            except _StopException:
                return StopReason.STOP

        # Self-modification: the cell at C (after any jump) is rewritten
        value = self.mem.read(regs.C)
        if is_printable(value):
            self.mem.write(regs.C, mutate(value))

        regs.C = (regs.C + 1) % MEMORY_SIZE
        regs.D = (regs.D + 1) % MEMORY_SIZE
        return None

    def run(self) -> StopReason:
        """Run until the machine halts or stops.

        Raises:
            VMIOError: the input stream failed; execution does not resume.
        """
        log.debug("Starting execution: %s", self.regs.display())
        try:
            reason = self.step()
            while reason is None:
                reason = self.step()
        finally:
            self.console.flush()
        log.info("Execution ended (%s): %s", reason.value, self.regs.display())
        return reason

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> dict:
        """Build opcode → handler dispatch table.

        Decoded characters missing from this table are no-ops.
        """
        return {
            OP_JMP_D: self._op_jmp_d,
            OP_JMP_C: self._op_jmp_c,
            OP_ROT:   self._op_rot,
            OP_CRAZY: self._op_crazy,
            OP_OUT:   self._op_out,
            OP_IN:    self._op_in,
            OP_STOP:  self._op_stop,
            OP_NOP:   self._op_nop,
        }

    def _op_jmp_d(self):
        self.regs.D = self.mem.read(self.regs.D)

    def _op_jmp_c(self):
        self.regs.C = self.mem.read(self.regs.D)

    def _op_rot(self):
        self.regs.A = tri_rotate(self.mem.read(self.regs.D))
        self.mem.write(self.regs.D, self.regs.A)

    def _op_crazy(self):
        self.regs.A = crazy_op(self.regs.A, self.mem.read(self.regs.D))
        self.mem.write(self.regs.D, self.regs.A)

    def _op_out(self):
        self.console.write_byte(self.regs.A)

    def _op_in(self):
        try:
            byte = self.console.read_byte()
        except OSError as e:
            raise VMIOError(
                f"Input failed at C={self.regs.C}: {e}", self.regs.C) from e
        self.regs.A = EOF_VALUE if byte is None else byte

    def _op_stop(self):
        raise _StopException("STOP")

    def _op_nop(self):
        pass

    def reset(self):
        """Reset registers and console buffers. Memory is kept."""
        self.regs.reset()
        self.console.reset()


# Internal exception for flow control
class _StopException(Exception):
    pass
