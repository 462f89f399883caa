"""Log entry model"""

import dataclasses
import enum
from datetime import datetime


class Severity(enum.Enum):
    """Severity classes a log level is bucketed into"""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    OTHER = "other"

    @classmethod
    def from_level(cls, level: str) -> "Severity":
        """Classify a free-text level such as 'Error' or 'info'"""
        try:
            return cls(level.strip().lower())
        except ValueError:
            return cls.OTHER


@dataclasses.dataclass(frozen=True)
class LogEntry:  # pylint: disable=too-many-instance-attributes
    """Represents a single log entry returned by the log source"""

    env: str
    level: str
    label: str
    message: str
    payload: str = ""
    timestamp: datetime | None = None
    generated_at: str = ""
    program: str = ""
    hostname: str = ""

    @property
    def severity(self) -> Severity:
        """Severity bucket of the entry's level"""
        return Severity.from_level(self.level)

    @property
    def date_text(self) -> str:
        """Short timestamp, e.g. '2021-3-7 09:05'"""
        if self.timestamp is None:
            return ""
        ts = self.timestamp
        return f"{ts.year}-{ts.month}-{ts.day} {ts:%H:%M}"

    def display(self) -> str:
        """One-line plain text summary of the entry"""
        return (
            f"{self.date_text} [{self.env}] -  {self.level}  "
            f"({self.label}) ~{self.message}"
        )


def parse_timestamp(ts_str: str) -> datetime | None:
    """Parse an RFC 3339 timestamp, returning None when it is not one"""
    if not ts_str:
        return None
    try:
        return datetime.fromisoformat(ts_str.replace("Z", "+00:00"))
    except ValueError:
        return None
