"""Entry point for the shkcodes CLI.

Running the package directly dispatches to the main function of the cli module.
"""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
