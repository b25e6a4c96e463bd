import sys

from research_launcher.cli import main

sys.exit(main())
