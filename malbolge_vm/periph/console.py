"""
Malbolge VM - Console I/O Port

The `<` and `/` opcodes talk to a single byte-wide console:

  write   `<` sends A & 0xFF, one byte per instruction
  read    `/` takes one byte; an empty read means end of input

The console is backed either by binary streams (the CLI passes stdin and
stdout buffers) or, when no stream is given, by in-memory queues:

  - TX bytes are appended to tx_buffer for inspection.
  - RX bytes are injected with inject_rx(); an empty queue reads as end
    of input.

Stream errors (OSError) are not handled here; they propagate to the
emulator, which turns input failures into VMIOError.
"""

from collections import deque
from typing import BinaryIO, Optional


class ConsolePort:
    """Byte console for the output and input opcodes."""

    def __init__(self, rx_stream: Optional[BinaryIO] = None,
                 tx_stream: Optional[BinaryIO] = None):
        self.rx_stream = rx_stream
        self.tx_stream = tx_stream

        # TX capture - used when there is no output stream
        self.tx_buffer: bytearray = bytearray()

        # RX injection queue - used when there is no input stream
        self._rx_queue: deque = deque()

    # --- Opcode side ---

    def write_byte(self, value: int):
        """Transmit the low 8 bits of value."""
        value &= 0xFF
        if self.tx_stream is None:
            self.tx_buffer.append(value)
        else:
            self.tx_stream.write(bytes((value,)))

    def read_byte(self) -> Optional[int]:
        """Receive one byte, or None at end of input.

        Pending output is flushed first so a prompt is visible before the
        program blocks on input.
        """
        self.flush()
        if self.rx_stream is None:
            if self._rx_queue:
                return self._rx_queue.popleft()
            return None
        data = self.rx_stream.read(1)
        if not data:
            return None
        return data[0]

    def flush(self):
        if self.tx_stream is not None:
            self.tx_stream.flush()

    # --- External API (test harness) ---

    def inject_rx(self, data: bytes):
        """Queue bytes to be returned by read_byte() (no rx_stream only)."""
        for byte in data:
            self._rx_queue.append(byte & 0xFF)

    @property
    def output(self) -> bytes:
        """All bytes captured in tx_buffer since the last reset."""
        return bytes(self.tx_buffer)

    def reset(self):
        self.tx_buffer.clear()
        self._rx_queue.clear()
