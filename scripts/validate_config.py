#!/usr/bin/env python3
"""Check the zzptax rate tables (``src/zzptax/backend/config/data``).

Usage: ``python scripts/validate_config.py [YEAR ...]``. Without arguments every
year in ``manifest.yaml`` is checked; the exit status is 1 when any table fails
to load or reports an issue. Installed copies expose the same check as the
``zzptax-validate-config`` console script.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from zzptax.backend.config.validator import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
