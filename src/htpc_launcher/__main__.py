"""Allow ``python -m htpc_launcher``."""

from .cli import main

if __name__ == "__main__":
    main()
