"""
Allow running devtoolsctl as a module: python -m apollo_devtools.cli
"""

import sys
from .devtoolsctl import main

if __name__ == "__main__":
    sys.exit(main())
