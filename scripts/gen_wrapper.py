#!/usr/bin/env python3
"""
gen_wrapper.py - JerryScript wrapper generator entry point

Usage:
    python scripts/gen_wrapper.py symbolsfile.txt classname [--js-class-name NAME]
        [--library-name NAME] [--header-file PATH] [--dont-create-files]
"""

import os
import sys

# Add scripts directory to path
script_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, script_dir)

from wrapper_gen.cli import main

if __name__ == '__main__':
    sys.exit(main())
