"""결과 파일 - 연도별 CSV 형식 요약 행"""

from pathlib import Path


class ResultFile:
    """요약 행 누적 + (선택) 파일 기록

    write는 메모리에만 쌓고, flush가 미기록 행을 한 번에 파일에 붙인다 (엔진은 연말마다 호출).
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        self.rows: list[str] = []
        self._pending: list[str] = []
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8'):
                pass

    def write(self, row: str):
        self.rows.append(row)
        if self.path is not None:
            self._pending.append(row)

    def write_all(self, rows: list[str]):
        for row in rows:
            self.write(row)

    def flush(self):
        if self.path is None or not self._pending:
            return
        with open(self.path, 'a', encoding='utf-8') as f:
            f.write("\n".join(self._pending) + "\n")
        self._pending = []
