"""
Entry point for running groot as a module.

Usage: python -m groot [command] [options]
"""

from groot.cli.parser import main

if __name__ == "__main__":
    main()
