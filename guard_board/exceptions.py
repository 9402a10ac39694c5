# exceptions.py


class BoardError(Exception):
    """보드 전체 공통 예외."""


class ValidationError(BoardError):
    """입력값 검증 실패. 메시지는 그대로 사용자에게 보여준다."""


class MalformedRow(BoardError):
    """CSV 행 형식 오류 (필드 수, 타입, id). 가져오기에서 조용히 건너뛴다."""

    def __init__(self, line_no: int, reason: str):
        super().__init__(f"line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason


class DuplicateId(BoardError):
    """이미 존재하는 id. 병합 시 건너뛴다."""

    def __init__(self, kind: str, record_id: int):
        super().__init__(f"{kind} id {record_id} already exists")
        self.kind = kind
        self.record_id = record_id


class ImportInProgress(BoardError):
    """가져오기가 이미 진행 중."""
