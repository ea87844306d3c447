# wemo_agent/domain/telemetry/insight.py
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")

# Token 5 of the Insight payload. Always this value on the devices seen so far:
# two weeks in seconds, the window for the *_two_weeks and average figures.
INSIGHT_WINDOW_SECONDS = 1209600
INSIGHT_FIELD_COUNT = 10


class TelemetrySnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: bool = False
    last_change: int = 0
    on_seconds: int = 0  # since last switched on, 0 when off
    on_seconds_today: int = 0
    on_seconds_two_weeks: int = 0
    average_watt: float = 0.0  # W
    current_w: float = 0.0  # W, instantaneous
    energy_today: float = 0.0  # kWh
    energy_two_weeks: float = 0.0  # device reports mW-minutes, scaled like energy_today


class DecodeResult(BaseModel, Generic[T]):
    """Best-effort value from a permissive read.

    ``warning`` is set when the device answer could not be decoded and
    ``value`` fell back to its default.
    """

    model_config = ConfigDict(frozen=True)

    value: T
    warning: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.warning is not None
