# gui/calendar_widget.py
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QFrame
from PySide6.QtCore import Qt

from guard_board.logic.projection import MonthView
from guard_board.utils.date_helper import leading_blank_cells

CELL_STYLES = {
    "holiday": "QFrame { background:#ffe3b3; border:1px solid #e0a84f; }",
    "shift":   "QFrame { background:#d6ecff; border:1px solid #5c9bd6; }",
    "":        "QFrame { background:#ffffff; border:1px solid #dddddd; }",
}
EMPTY_STYLE = "QFrame { background:transparent; border:none; }"


class CalendarWidget(QWidget):
    def __init__(self, on_day_open=None):
        super().__init__()
        self.on_day_open = on_day_open
        self.vbox = QVBoxLayout(self)

        header = QGridLayout()
        self.vbox.addLayout(header)
        weekdays = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
        for c, w in enumerate(weekdays):
            lbl = QLabel(w); lbl.setAlignment(Qt.AlignCenter)
            lbl.setStyleSheet("font-weight:600;")
            header.addWidget(lbl, 0, c)

        self.grid = QGridLayout()
        self.vbox.addLayout(self.grid)

    def clear_grid(self):
        while self.grid.count():
            item = self.grid.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)

    def render_month(self, view: MonthView):
        self.clear_grid()
        blanks = leading_blank_cells(view.year, view.month)

        # 1일 앞 빈 칸 (일요일 시작)
        for c in range(blanks):
            blank = QFrame()
            blank.setStyleSheet(EMPTY_STYLE)
            self.grid.addWidget(blank, 0, c)

        for i, cell in enumerate(view.cells):
            pos = blanks + i
            r, c = divmod(pos, 7)

            frame = QFrame()
            frame.setObjectName(cell.kind or "plain")
            frame.setStyleSheet(CELL_STYLES[cell.kind])
            v = QVBoxLayout(frame)
            v.setSpacing(4)

            day_lbl = QLabel(str(cell.day))
            day_lbl.setAlignment(Qt.AlignTop | Qt.AlignRight)
            v.addWidget(day_lbl)

            # 근무/휴가가 겹쳐도 둘 다 보여준다 (분류는 휴가)
            if cell.guard_name:
                v.addWidget(QLabel(f"🪖 {cell.guard_name}"))
            if cell.holiday_name:
                v.addWidget(QLabel(f"🏖️ {cell.holiday_name}"))
            v.addStretch(1)

            if self.on_day_open:
                def open_editor(_=None, key=cell.date):
                    self.on_day_open(key)
                frame.mouseDoubleClickEvent = lambda ev, fn=open_editor: fn()

            self.grid.addWidget(frame, r, c)
