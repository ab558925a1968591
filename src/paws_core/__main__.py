"""
Run the paws CLI.

Usage:
    python -m paws_core status kennel.json
"""

import sys

from .interface.cli import main

sys.exit(main())
