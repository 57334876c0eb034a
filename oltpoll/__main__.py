"""
oltpoll - Module Entry Point.

Allows running the poller as a module:
    python -m oltpoll discover <host> --vendor huawei
    python -m oltpoll detail --config olts.yaml --all
"""

import sys

from oltpoll.cli import main

if __name__ == '__main__':
    sys.exit(main())
