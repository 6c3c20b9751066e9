"""
Main entry point for the profile_crawler package.

Allows running the crawler as: python -m profile_crawler
"""

import sys

from profile_crawler.cli import main

if __name__ == "__main__":
    sys.exit(main())
