"""Entry point for `python -m orbitview`."""
from orbitview.main import main

if __name__ == "__main__":
    main()
