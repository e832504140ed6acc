"""
Entry point for module execution (``python -m tsstrip``).

This module delegates execution to the CLI handler in ``tsstrip.cli.__main__``.
"""

import sys
from tsstrip.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
