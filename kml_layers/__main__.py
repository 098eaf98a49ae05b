"""Allow ``python -m kml_layers``."""

import sys

from kml_layers.cli import main

sys.exit(main())
