# backend/tc_alerts/schemas/alert.py
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, Field


class AlertLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"

    def __str__(self) -> str:
        return self.value


LevelLike = Union[AlertLevel, str]


def _level_text(level: LevelLike) -> str:
    return level.value if isinstance(level, AlertLevel) else str(level)


class Alert(BaseModel):
    """A single message returned through the API."""
    text: str
    # Should be one of the AlertLevel spellings; not enforced.
    level: str

    class Config:
        frozen = True


class Alerts(BaseModel):
    """
    Ordered collection of Alert values, rendered on the wire as
    {"alerts": [{"text": ..., "level": ...}, ...]}.
    """
    alerts: List[Alert] = Field(default_factory=list)

    def add_new_alert(self, level: LevelLike, text: str) -> None:
        self.add_alert(Alert(text=text, level=_level_text(level)))

    def add_alert(self, alert: Alert) -> None:
        self.alerts.append(alert)

    def add_alerts(self, other: "Alerts") -> None:
        """
        Append all of other's alerts after this bag's own.
        Builds a fresh list so neither bag shares storage with the other.
        """
        merged = list(self.alerts)
        merged.extend(other.alerts)
        self.alerts = merged

    def to_strings(self) -> List[str]:
        """Message texts only, in order. Levels are dropped."""
        return [a.text for a in self.alerts]


def create_error_alerts(*errs: Optional[object]) -> Alerts:
    """One error-level alert per non-None error, using str(err) as text."""
    return Alerts(alerts=[
        Alert(text=str(err), level=AlertLevel.ERROR.value)
        for err in errs
        if err is not None
    ])


def create_alerts(level: LevelLike, *messages: str) -> Alerts:
    lvl = _level_text(level)
    return Alerts(alerts=[Alert(text=m, level=lvl) for m in messages])
