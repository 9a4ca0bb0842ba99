"""Dance Challenge -- entry point.

Run from this directory:
    python play.py

Or as a module:
    python -m dance_challenge.main
"""

from dance_challenge.main import main


if __name__ == "__main__":
    main()
