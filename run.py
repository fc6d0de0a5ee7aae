"""Entry point for the FTSE 100 scenarios - run with: python run.py"""

import os
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ftse_scraper.main import main


if __name__ == "__main__":
    sys.exit(main())
