"""Allow running logicgraph as ``python -m logicgraph``."""

import sys

from logicgraph.cli import main

sys.exit(main())
