"""Run the cache harness with ``python -m lfucache_core``."""

import sys

from lfucache_core.cli import main

sys.exit(main())
