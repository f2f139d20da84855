"""Allow ``python -m langkit``."""

import sys

from langkit.cli import main

if __name__ == '__main__':
    sys.exit(main())
