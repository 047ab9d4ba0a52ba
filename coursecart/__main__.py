"""
Package entry point.

Allows running the application via:

    python -m coursecart

This simply forwards execution to coursecart.cli.main().
"""

from coursecart.cli import main

if __name__ == "__main__":
    main()
