"""research-cli Launch Script.

Runs the launcher straight from a source checkout, without installing the
``research-cli`` console script. Every argument passes through to the
Node.js CLI.

Usage:
    python launch.py --help
    python launch.py config show
"""

import sys
from pathlib import Path

if __name__ == "__main__":
    # Make the in-tree package importable without an install
    sys.path.insert(0, str(Path(__file__).parent))

    from research_launcher.cli import main

    sys.exit(main())
