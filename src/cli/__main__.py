"""Allow ``python -m src.cli`` execution."""

import sys

from src.cli.insights import main

sys.exit(main())
