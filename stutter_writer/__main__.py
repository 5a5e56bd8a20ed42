"""Package entry point for ``python -m stutter_writer``.

Delegates straight to the CLI's main().
"""

from stutter_writer.cli import main

if __name__ == "__main__":
    main()
