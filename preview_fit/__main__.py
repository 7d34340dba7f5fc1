"""Allow ``python -m preview_fit`` to run the command-line interface."""

from __future__ import annotations

import sys

from preview_fit.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
