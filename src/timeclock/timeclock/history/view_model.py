from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord


class HistoryViewModel:
    """Last successfully fetched attendance history, in server order.

    The sequence is only ever replaced as a whole.
    """

    def __init__(self, *, tz: Optional[tzinfo] = None):
        self._records: tuple[AttendanceRecord, ...] = ()
        self._tz = tz

    @property
    def records(self) -> tuple[AttendanceRecord, ...]:
        return self._records

    def replace(self, records: Sequence[AttendanceRecord]) -> None:
        self._records = tuple(records)

    def clear(self) -> None:
        self._records = ()

    def __len__(self) -> int:
        return len(self._records)

    def rows(self) -> list[dict]:
        return [self._to_ui(r) for r in self._records]

    def _local(self, value: datetime) -> datetime:
        if value.tzinfo is not None:
            return value.astimezone(self._tz)
        return value

    def _fmt_time(self, value: Optional[datetime]) -> str:
        if value is None:
            return "-"
        return self._local(value).strftime("%H:%M:%S")

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "id": r.record_id,
            "date": self._local(r.date).strftime("%Y-%m-%d"),
            "check_in": self._fmt_time(r.check_in),
            "check_out": self._fmt_time(r.check_out),
            "break_in": self._fmt_time(r.break_in),
            "break_out": self._fmt_time(r.break_out),
            "check_in_photo": r.check_in_photo,
            "check_out_photo": r.check_out_photo,
            "break_in_photo": r.break_in_photo,
            "break_out_photo": r.break_out_photo,
            "total_hours": f"{r.total_hours:.2f}" if r.total_hours is not None else "-",
            "status": r.status or "N/A",
            "remarks": r.remarks or "N/A",
        }
