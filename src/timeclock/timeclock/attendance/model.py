from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_server_timestamp
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day, as computed by the server."""

    record_id: str
    # Full server timestamp; the calendar day depends on the display timezone.
    date: datetime
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    break_in: Optional[datetime] = None
    break_out: Optional[datetime] = None
    check_in_photo: Optional[str] = None
    check_out_photo: Optional[str] = None
    break_in_photo: Optional[str] = None
    break_out_photo: Optional[str] = None
    total_hours: Optional[float] = None
    status: Optional[str] = None
    remarks: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        if not isinstance(data, Mapping):
            raise ValidationError("Attendance record must be an object")

        record_id = data.get("_id")
        day = parse_server_timestamp(data.get("date"))
        if not record_id or day is None:
            raise ValidationError("Attendance record is missing _id or date")

        return cls(
            record_id=str(record_id),
            date=day,
            check_in=parse_server_timestamp(data.get("checkIn")),
            check_out=parse_server_timestamp(data.get("checkOut")),
            break_in=parse_server_timestamp(data.get("breakIn")),
            break_out=parse_server_timestamp(data.get("breakOut")),
            check_in_photo=_optional_str(data.get("checkInPhoto")),
            check_out_photo=_optional_str(data.get("checkOutPhoto")),
            break_in_photo=_optional_str(data.get("breakInPhoto")),
            break_out_photo=_optional_str(data.get("breakOutPhoto")),
            total_hours=_optional_float(data.get("totalHours")),
            status=_optional_str(data.get("status")),
            remarks=_optional_str(data.get("remarks")),
        )


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
