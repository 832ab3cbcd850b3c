"""Allow ``python -m matchwheel``."""

import sys

from matchwheel.cli import main

if __name__ == "__main__":
    sys.exit(main())
