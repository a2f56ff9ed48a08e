#!/usr/bin/env python
"""Simple entry point to run the fsgate server."""

import sys

from fsgate.cli import main

if __name__ == "__main__":
    sys.exit(main())
