"""Entry point for 'python -m inkpress' command.

This module allows the Inkpress CLI to be invoked using
'python -m inkpress' or 'python -m inkpress serve'.
"""

from inkpress.cli import main

if __name__ == "__main__":
    main()
