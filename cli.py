"""CLI entry point - thin wrapper around the cli package

Run with: python cli.py [--debug] [--bind ADDR] [--port N] [--check-config]
"""

from cli.main import main

if __name__ == "__main__":
    main()
