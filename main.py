#!/usr/bin/env python3
"""
Entry point for running ArticleLens from a source checkout.

Equivalent to the installed ``articlelens`` command.
"""

from __future__ import annotations

from articlelens.cli import main

if __name__ == "__main__":
    main()
