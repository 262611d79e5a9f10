"""Command-line interface."""
from earthcurve.main import main

if __name__ == "__main__":
    main()
