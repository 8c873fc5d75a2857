"""Entry point for todo-app when run as a module.

This allows the package to be run with: python -m todo_app
"""

import sys

from todo_app.cli import main

if __name__ == "__main__":
    sys.exit(main())
