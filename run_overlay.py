#!/usr/bin/env python3
"""
Frame Stats - GUI overlay launcher
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from start import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:] + ["--gui"]))
