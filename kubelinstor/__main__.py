"""Module entry point for python -m kubelinstor."""

import sys

from kubelinstor.cli import main

if __name__ == "__main__":
    sys.exit(main())
