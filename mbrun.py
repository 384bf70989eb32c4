#!/usr/bin/env python3
"""
mbrun - Malbolge VM command line runner

Usage:
    python mbrun.py <program.mb> [-i input.txt] [-v | -vv] [--log-dir logs]

The program reads from stdin (or --input) and writes raw bytes to stdout.
Diagnostics and logs go to stderr.

Exit status:
    0  program halted or stopped
    1  source file unreadable or rejected by the loader
    2  input stream failed while the program was running

Examples:
    python mbrun.py hello.mb
    echo abc | python mbrun.py cat.mb
    python mbrun.py cat.mb -i notes.txt -vv --log-dir logs
"""

import argparse
import logging
import os
import sys

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from malbolge_vm import __version__, load, LoadError
from malbolge_vm.emu import MalbolgeVM, VMIOError
from malbolge_vm.log_setup import setup_logging
from malbolge_vm.periph.console import ConsolePort

VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="mbrun",
        description="Malbolge virtual machine",
    )
    parser.add_argument("source", help="Malbolge source file")
    parser.add_argument("-i", "--input", default=None,
                        help="Read program input from this file instead of stdin")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress to stderr (-vv for debug detail)")
    parser.add_argument("--log-dir", default=None,
                        help="Also write a debug log file into this directory")
    parser.add_argument("--version", action="version",
                        version=f"mbrun {__version__}")

    args = parser.parse_args(argv)

    console_level = VERBOSITY_LEVELS[min(args.verbose, len(VERBOSITY_LEVELS) - 1)]
    log = setup_logging(console_level=console_level, log_dir=args.log_dir)

    # Read source
    try:
        with open(args.source, "rb") as f:
            source = f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {args.source}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error reading {args.source}: {e}", file=sys.stderr)
        sys.exit(1)

    log.info("Source: %s (%d bytes)", args.source, len(source))

    try:
        mem = load(source)
    except LoadError as e:
        print(f"Could not initialize memory.\n{e}", file=sys.stderr)
        sys.exit(1)

    try:
        rx = open(args.input, "rb") if args.input else sys.stdin.buffer
    except OSError as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        sys.exit(1)

    vm = MalbolgeVM(mem=mem, console=ConsolePort(rx_stream=rx,
                                                  tx_stream=sys.stdout.buffer))
    try:
        vm.run()
    except VMIOError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        log.warning("Interrupted: %s", vm.regs.display())
        sys.exit(130)
    finally:
        if args.input:
            rx.close()


if __name__ == "__main__":
    main()
