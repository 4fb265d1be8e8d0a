#!/usr/bin/env python3
"""Create the demo snapshot database used by GL_DEMO resets.

Usage:
    # Writes grocery_demo.db next to where the server runs:
    python scripts/seed_demo_data.py

    # Or a specific file:
    python scripts/seed_demo_data.py sqlite:///path/to/grocery_demo.db
"""

import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from grocery_list.config import get_settings
from grocery_list.services.demo_data import seed_demo_snapshot


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")

    if len(sys.argv) > 1:
        database_url = sys.argv[1]
    else:
        database_url = f"sqlite:///{get_settings().demo_database_path}"

    count = seed_demo_snapshot(database_url)
    print(f"Demo snapshot ready at {database_url} ({count} entries)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
