"""Allow ``python -m phongtrace``."""

import sys

from phongtrace.cli import main

sys.exit(main())
