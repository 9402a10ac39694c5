# app.py
import sys

from PySide6.QtWidgets import QApplication

from guard_board.config import STORE_FILE, setup_logging
from guard_board.data.data_manager import JsonFileBlobStore, Persistence
from guard_board.data.store import RecordStore
from guard_board.gui.main_window import MainWindow


def main():
    setup_logging()
    store = RecordStore(Persistence(JsonFileBlobStore(STORE_FILE))).load()

    app = QApplication(sys.argv)
    win = MainWindow(store)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
