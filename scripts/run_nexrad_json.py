#!/usr/bin/env python3
"""``nexrad-json`` runner.

Usage:
    python scripts/run_nexrad_json.py KTLX20130520_201643_V06.gz
    python scripts/run_nexrad_json.py KTLX20130520_201643_V06.gz --product vel --elevations-til 3
    python scripts/run_nexrad_json.py KTLX20130520_201643_V06.gz -c scripts/user_config.py

Installed packages expose the same entry point as the ``nexrad-json`` command.
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from nexrad_json.cli.run_nexrad import main


if __name__ == "__main__":
    sys.exit(main())
