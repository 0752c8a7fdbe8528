"""Package entry point for ``python -m bengali_keyboard``.

HOW: ``--gui`` anywhere on the command line launches the Tkinter window.
Otherwise the arguments go to the CLI's main().
"""

import sys

if __name__ == "__main__":
    if "--gui" in sys.argv:
        from bengali_keyboard.gui import main as gui_main
        gui_main()
    else:
        from bengali_keyboard.cli import main
        main()
