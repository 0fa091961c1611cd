"""dirbackup: dirbackup/__main__.py

Allows running the tool with ``python -m dirbackup``.
"""

import sys

from .cli import main

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        sys.exit(1)
