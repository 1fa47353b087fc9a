"""Package entry point for ``python -m speedread``.

WHY: Users launch the desktop reader with ``python -m speedread``.

HOW: Delegates to speedread.gui.main(), which blocks until the window
is closed.
"""

from speedread.gui import main

if __name__ == "__main__":
    main()
