#!/usr/bin/env python3
"""groovy2js — translate Groovy scripts to JavaScript.

Thin entry point that delegates to src.translator.main.
"""

import sys

from src.translator.main import main

if __name__ == "__main__":
    sys.exit(main())
