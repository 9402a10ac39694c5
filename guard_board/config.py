# config.py
import logging
import logging.handlers
from pathlib import Path

# 프로젝트 루트 = .../guard_board
BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
STORE_FILE = DATA_DIR / "board.json"     # "shifts" / "holidays" 두 키를 담는 파일
LOG_DIR = BASE_DIR / "logs"
LOG_FILE = LOG_DIR / "board.log"
LOG_LEVEL = logging.INFO

WINDOW_TITLE = "Guarding & Holidays Board"
WINDOW_SIZE = (1100, 900)


def setup_logging(level: int = LOG_LEVEL, log_file: Path = LOG_FILE) -> logging.Logger:
    """앱 시작 시 한 번 호출. 파일(회전) + stderr 핸들러를 붙인다."""
    root = logging.getLogger("guard_board")
    if root.handlers:
        return root
    root.setLevel(level)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    stream = logging.StreamHandler()
    stream.setFormatter(fmt)
    root.addHandler(stream)
    return root
