"""Allow running autotrans with ``python -m autotrans``."""

import sys

from autotrans.cli import main

sys.exit(main())
