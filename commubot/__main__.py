"""
Package entry point.

Allows running the application via:

    python -m commubot

This simply forwards execution to commubot.cli.main().
"""

from commubot.cli import main

if __name__ == "__main__":
    main()
