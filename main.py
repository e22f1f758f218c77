#!/usr/bin/env python3
"""
Gene Battle - terminal auto battler

Thin wrapper around the CLI in the genebattle package, which sets up a
3v3 battle from the command line and plays it out with the AI on both
sides.

To run: python main.py --seed 7 --difficulty hard
"""

from genebattle.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
