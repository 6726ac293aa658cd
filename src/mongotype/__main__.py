"""Allow ``python -m mongotype``."""

import sys

from mongotype.cli import main

sys.exit(main())
