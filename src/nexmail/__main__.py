# =============================================================================
# NexMail Entry Point for `python -m nexmail`
# =============================================================================
# This module allows NexMail to be run as a Python module:
#
#   python -m nexmail
#
# This is equivalent to running the 'nexmail' command after installation.
# =============================================================================

import sys

from nexmail.app import main

if __name__ == "__main__":
    sys.exit(main())
