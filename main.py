import logging
import sys

from dotenv import load_dotenv

import config
from ui.main_window import MainWindow


def main():
    load_dotenv()
    logging.basicConfig(level=config.log_level(), format=config.LOG_FORMAT)

    app = MainWindow()
    if len(sys.argv) > 1:
        app.window.after(100, lambda: app.open_path(sys.argv[1]))
    app.window.mainloop()


if __name__ == "__main__":
    main()
