#!/usr/bin/env python3
"""
Pull request -> Asana linking step.

Usage:
    python action.py --action assert-link --link-required true
"""

import sys
from pathlib import Path

# Support running as a standalone script from repo root.
REPO_ROOT = Path(__file__).resolve().parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from prlink.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
