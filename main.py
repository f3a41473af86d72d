#!/usr/bin/env python3
"""
Main script to generate an AI short video from a topic and publish it.
Uses the pipeline in src/shorts_automation; run from project root.
"""

import sys
from pathlib import Path

# Allow running from a checkout without `pip install -e .`
_SRC = Path(__file__).resolve().parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


if __name__ == "__main__":
    from shorts_automation.cli import main

    sys.exit(main())
