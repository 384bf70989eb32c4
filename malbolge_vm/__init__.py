"""
Malbolge VM
===========
An interpreter for Malbolge, the ternary, self-modifying esoteric language.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────────┐    ┌──────────┐
    │  Source  │───>│  Loader  │───>│ Memory image │───>│ Emulator │───> output bytes
    │ (.mb)    │    │(validate)│    │ (59049 cells)│    │ (A, C, D)│<─── input bytes
    └──────────┘    └──────────┘    └──────────────┘    └──────────┘

    - cpu/alu.py:       crazy_op and tri_rotate on 10-trit values
    - cpu/decoder.py:   XLAT1 (decode) and XLAT2 (mutate) tables
    - cpu/regs.py:      A, C, D registers
    - mem/memory.py:    flat 3^10 cell store
    - loader.py:        source validation and memory fill
    - periph/console.py: byte console for the < and / opcodes
    - emu.py:           fetch / decode / execute / mutate loop
"""

__version__ = "0.3.0"

from typing import BinaryIO, Optional, Union

from .loader import (
    load, LoadError, InvalidCharacterError,
    SourceTooShortError, SourceTooLongError,
)
from .mem.memory import Memory, MEMORY_SIZE
from .periph.console import ConsolePort
from .emu import MalbolgeVM, StopReason, VMIOError, EOF_VALUE


def run_source(source: Union[bytes, bytearray, str], *,
               stdin: Optional[BinaryIO] = None,
               stdout: Optional[BinaryIO] = None,
               input_data: bytes = b"") -> bytes:
    """Load and run a program, returning whatever it wrote.

    Full pipeline: load -> MalbolgeVM.run.

    Args:
        source: Program text.
        stdin: Binary stream for the input opcode. When omitted, input_data
               is used and end of input follows it.
        stdout: Binary stream for the output opcode. When given, output is
                written there and the return value is b"".
        input_data: Bytes fed to the program when stdin is omitted.

    Raises:
        LoadError: the program was rejected; nothing was executed.
        VMIOError: stdin failed while the program was reading.
    """
    console = ConsolePort(rx_stream=stdin, tx_stream=stdout)
    if stdin is None:
        console.inject_rx(input_data)
    vm = MalbolgeVM(mem=load(source), console=console)
    vm.run()
    return console.output
