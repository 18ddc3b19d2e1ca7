"""Entry point for running domevent as a module.

This file allows the dispatch tracer to be run with: python -m domevent
"""

from domevent.app import main

if __name__ == "__main__":
    main()
