"""Allow ``python -m autocodable``."""

import sys

from .cli import main

sys.exit(main())
