from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    AUTO = "AUTO"
    OFF = "OFF"


class PowerState(Enum):
    OFF = 0
    ON = 1


@dataclass(frozen=True)
class ThresholdConfig:
    """LOW/HIGH humidity thresholds and the automation mode from the sheet."""

    low: float
    high: float
    mode: Mode


@dataclass(frozen=True)
class SignalTarget:
    """A pre-recorded Nature Remo signal (virtual remote button)."""

    name: str
    signal_id: str | None
