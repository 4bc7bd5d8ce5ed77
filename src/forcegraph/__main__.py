"""
Run with: python -m forcegraph
"""
import sys

from forcegraph.main import main

if __name__ == "__main__":
    sys.exit(main())
