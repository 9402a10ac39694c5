# gui/main_window.py
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QToolBar, QPushButton,
    QLabel, QListWidget, QListWidgetItem, QMessageBox, QLineEdit, QGroupBox,
    QGridLayout, QSplitter, QFileDialog
)
from PySide6.QtCore import Qt, QTimer

from guard_board.config import WINDOW_SIZE, WINDOW_TITLE
from guard_board.data.store import RecordStore
from guard_board.exceptions import ImportInProgress, ValidationError
from guard_board.gui.calendar_widget import CalendarWidget
from guard_board.logic.csv_codec import EXPORT_FILENAME, read_csv_file, write_csv_file
from guard_board.logic.projection import overlapping_holidays
from guard_board.logic.session import BoardSession, GuardDraft, HolidayDraft
from guard_board.utils.date_helper import is_date_key

logger = logging.getLogger(__name__)

MSG_DATE_FORMAT = "날짜는 YYYY-MM-DD 형식으로 입력해주세요."


class MainWindow(QMainWindow):
    def __init__(self, store: RecordStore):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(*WINDOW_SIZE)

        self.session = BoardSession(store)

        self._build_ui()
        self.refresh()

    # ---------------- UI ----------------
    def _build_ui(self):
        # Toolbar
        tb = QToolBar()
        self.addToolBar(tb)

        btn_prev = QPushButton("◀ 이전달")
        btn_prev.clicked.connect(self.prev_month)
        tb.addWidget(btn_prev)

        self.month_label = QLabel("")
        self.month_label.setStyleSheet("font-weight:600; padding:0 8px;")
        tb.addWidget(self.month_label)

        btn_next = QPushButton("다음달 ▶")
        btn_next.clicked.connect(self.next_month)
        tb.addWidget(btn_next)

        tb.addSeparator()

        btn_export = QPushButton("Export CSV")
        btn_export.clicked.connect(self.export_csv)
        tb.addWidget(btn_export)

        self.btn_import = QPushButton("Import CSV")
        self.btn_import.setToolTip("같은 id는 건너뛰고 새 레코드만 추가합니다.")
        self.btn_import.clicked.connect(self.import_csv)
        tb.addWidget(self.btn_import)

        tb.addSeparator()

        btn_reset = QPushButton("전체 삭제")
        btn_reset.clicked.connect(self.reset_board)
        tb.addWidget(btn_reset)

        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)

        splitter = QSplitter(Qt.Horizontal)
        root.addWidget(splitter)
        splitter.setHandleWidth(2)

        # ----- 좌측: 입력 폼 + 목록 -----
        left_container = QWidget()
        left = QVBoxLayout(left_container)

        # (A) 근무 입력
        guard_box = QGroupBox("근무 추가/편집")
        form = QGridLayout(guard_box)
        self.guard_name = QLineEdit(); self.guard_name.setPlaceholderText("근무자 이름")
        self.guard_date = QLineEdit(); self.guard_date.setPlaceholderText("YYYY-MM-DD")
        form.addWidget(QLabel("이름*"), 0, 0); form.addWidget(self.guard_name, 0, 1)
        form.addWidget(QLabel("날짜*"), 1, 0); form.addWidget(self.guard_date, 1, 1)
        btn_save_guard = QPushButton("근무 저장")
        btn_save_guard.clicked.connect(self._save_guard_form)
        form.addWidget(btn_save_guard, 2, 1)
        left.addWidget(guard_box)

        # (B) 휴가 입력
        holiday_box = QGroupBox("휴가 추가/편집")
        form = QGridLayout(holiday_box)
        self.holiday_name = QLineEdit(); self.holiday_name.setPlaceholderText("휴가 이름")
        self.holiday_start = QLineEdit(); self.holiday_start.setPlaceholderText("YYYY-MM-DD")
        self.holiday_end = QLineEdit(); self.holiday_end.setPlaceholderText("YYYY-MM-DD")
        form.addWidget(QLabel("이름*"), 0, 0); form.addWidget(self.holiday_name, 0, 1)
        form.addWidget(QLabel("시작일*"), 1, 0); form.addWidget(self.holiday_start, 1, 1)
        form.addWidget(QLabel("종료일*"), 2, 0); form.addWidget(self.holiday_end, 2, 1)
        btn_save_holiday = QPushButton("휴가 저장")
        btn_save_holiday.clicked.connect(self._save_holiday_form)
        form.addWidget(btn_save_holiday, 3, 1)
        left.addWidget(holiday_box)

        # (C) 목록
        left.addWidget(QLabel("근무 목록"))
        self.guard_list = QListWidget()
        left.addWidget(self.guard_list)
        row = QHBoxLayout()
        btn_edit_guard = QPushButton("편집"); btn_del_guard = QPushButton("삭제")
        btn_edit_guard.clicked.connect(self._edit_selected_guard)
        btn_del_guard.clicked.connect(self._delete_selected_guard)
        row.addStretch(1); row.addWidget(btn_edit_guard); row.addWidget(btn_del_guard)
        left.addLayout(row)

        left.addWidget(QLabel("휴가 목록"))
        self.holiday_list = QListWidget()
        left.addWidget(self.holiday_list)
        row = QHBoxLayout()
        btn_edit_holiday = QPushButton("편집"); btn_del_holiday = QPushButton("삭제")
        btn_edit_holiday.clicked.connect(self._edit_selected_holiday)
        btn_del_holiday.clicked.connect(self._delete_selected_holiday)
        row.addStretch(1); row.addWidget(btn_edit_holiday); row.addWidget(btn_del_holiday)
        left.addLayout(row)

        left_container.setMinimumWidth(300)
        left_container.setMaximumWidth(340)

        # ----- 우측: 달력 -----
        right_container = QWidget()
        right = QVBoxLayout(right_container)
        self.calendar = CalendarWidget(on_day_open=self.open_day)
        right.addWidget(self.calendar)

        splitter.addWidget(left_container)
        splitter.addWidget(right_container)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setCollapsible(1, False)

        self.guard_list.itemDoubleClicked.connect(lambda _item: self._edit_selected_guard())
        self.holiday_list.itemDoubleClicked.connect(lambda _item: self._edit_selected_holiday())

        self.status = self.statusBar()

    # ---------------- 데이터/바인딩 ----------------
    def _fill_lists(self):
        store = self.session.store
        self.guard_list.clear()
        if not store.guards:
            QListWidgetItem("No guards yet.", self.guard_list).setFlags(Qt.NoItemFlags)
        for g in store.guards:
            item = QListWidgetItem(f"🪖 {g.name} – {g.date}", self.guard_list)
            item.setData(Qt.UserRole, g.id)

        self.holiday_list.clear()
        if not store.holidays:
            QListWidgetItem("No holidays yet.", self.holiday_list).setFlags(Qt.NoItemFlags)
        for h in store.holidays:
            item = QListWidgetItem(f"🏖️ {h.name}: {h.start_date} → {h.end_date}", self.holiday_list)
            item.setData(Qt.UserRole, h.id)

    def _bind_drafts(self):
        gd = self.session.guard_draft
        self.guard_name.setText(gd.name)
        self.guard_date.setText(gd.date)
        hd = self.session.holiday_draft
        self.holiday_name.setText(hd.name)
        self.holiday_start.setText(hd.start_date)
        self.holiday_end.setText(hd.end_date)

    def _collect_drafts(self):
        self.session.guard_draft = GuardDraft(self.guard_name.text(), self.guard_date.text().strip())
        self.session.holiday_draft = HolidayDraft(
            self.holiday_name.text(), self.holiday_start.text().strip(), self.holiday_end.text().strip()
        )

    def _selected_id(self, widget: QListWidget):
        item = widget.currentItem()
        if item is None:
            return None
        return item.data(Qt.UserRole)

    # ---------------- 동작 ----------------
    def refresh(self):
        view = self.session.month_view()
        self.calendar.render_month(view)
        self._fill_lists()
        self.month_label.setText(f"{view.year}-{view.month:02d}")
        store = self.session.store
        self.status.showMessage(f"근무 {len(store.guards)}건, 휴가 {len(store.holidays)}건")

    def prev_month(self):
        self._collect_drafts()
        self.session.prev_month()
        self.refresh()

    def next_month(self):
        self._collect_drafts()
        self.session.next_month()
        self.refresh()

    def open_day(self, date_key: str):
        """달력 더블클릭 → 비어 있는 날짜 칸을 채운다."""
        if not self.guard_date.text().strip():
            self.guard_date.setText(date_key)
        if not self.holiday_start.text().strip():
            self.holiday_start.setText(date_key)
        if not self.holiday_end.text().strip():
            self.holiday_end.setText(date_key)

    def _warn(self, msg: str):
        QMessageBox.warning(self, "확인", msg)

    def _save_guard_form(self):
        self._collect_drafts()
        d = self.session.guard_draft
        if d.date and not is_date_key(d.date):
            self._warn(MSG_DATE_FORMAT)
            return
        try:
            self.session.save_guard()
        except ValidationError as exc:
            self._warn(str(exc))
            return
        self._bind_drafts()
        self.refresh()

    def _save_holiday_form(self):
        self._collect_drafts()
        d = self.session.holiday_draft
        if any(v and not is_date_key(v) for v in (d.start_date, d.end_date)):
            self._warn(MSG_DATE_FORMAT)
            return
        try:
            self.session.save_holiday()
        except ValidationError as exc:
            self._warn(str(exc))
            return
        overlapping_holidays(self.session.store)
        self._bind_drafts()
        self.refresh()

    def _edit_selected_guard(self):
        guard_id = self._selected_id(self.guard_list)
        if guard_id is None:
            return
        if self.session.edit_guard(guard_id):
            self._bind_drafts()
            self.refresh()
            self.status.showMessage("편집 중인 근무는 저장해야 다시 목록에 나타납니다.", 4000)

    def _edit_selected_holiday(self):
        holiday_id = self._selected_id(self.holiday_list)
        if holiday_id is None:
            return
        if self.session.edit_holiday(holiday_id):
            self._bind_drafts()
            self.refresh()
            self.status.showMessage("편집 중인 휴가는 저장해야 다시 목록에 나타납니다.", 4000)

    def _delete_selected_guard(self):
        guard_id = self._selected_id(self.guard_list)
        if guard_id is None:
            QMessageBox.information(self, "안내", "삭제할 근무를 선택해주세요.")
            return
        if QMessageBox.question(self, "확인", "이 근무를 삭제하시겠습니까?") != QMessageBox.Yes:
            return
        self.session.delete_guard(guard_id)
        self.refresh()

    def _delete_selected_holiday(self):
        holiday_id = self._selected_id(self.holiday_list)
        if holiday_id is None:
            QMessageBox.information(self, "안내", "삭제할 휴가를 선택해주세요.")
            return
        if QMessageBox.question(self, "확인", "이 휴가를 삭제하시겠습니까?") != QMessageBox.Yes:
            return
        self.session.delete_holiday(holiday_id)
        self.refresh()

    def reset_board(self):
        if QMessageBox.question(self, "확인", "모든 근무와 휴가를 삭제하시겠습니까?") != QMessageBox.Yes:
            return
        self.session.store.clear()
        self.refresh()

    # ---------------- CSV I/O ----------------
    def export_csv(self):
        path, _ = QFileDialog.getSaveFileName(self, "CSV 내보내기", EXPORT_FILENAME, "CSV (*.csv)")
        if not path:
            return
        try:
            written = write_csv_file(self.session.store, path)
        except OSError as exc:
            logger.error("export failed: %s", exc)
            QMessageBox.critical(self, "오류", f"내보내기 실패: {exc}")
            return
        self.status.showMessage(f"{written} 저장 완료.", 3000)

    def import_csv(self):
        try:
            self.session.begin_import()
        except ImportInProgress as exc:
            self.status.showMessage(str(exc), 3000)
            return
        self.btn_import.setEnabled(False)
        path, _ = QFileDialog.getOpenFileName(self, "CSV 가져오기", "", "CSV (*.csv)")
        if not path:
            self._finish_import(None)
            return
        # 파일 읽기 + 병합은 이벤트 루프 다음 차례에 한 번에
        QTimer.singleShot(0, lambda: self._read_and_merge(path))

    def _read_and_merge(self, path: str):
        try:
            text = read_csv_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("import read failed: %s", exc)
            QMessageBox.critical(self, "오류", f"파일을 읽을 수 없습니다: {exc}")
            text = None
        self._finish_import(text)

    def _finish_import(self, text):
        try:
            report = self.session.finish_import(text)
        finally:
            self.btn_import.setEnabled(True)
        if report is None:
            return
        self.refresh()
        self.status.showMessage(report.summary(), 5000)
