"""Allow running as: python -m svcbind"""

import sys

from svcbind.main import main

if __name__ == "__main__":
    sys.exit(main())
