"""
Entry point for running the groot CLI as a module.

Usage: python -m groot.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
