import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .wav import WaveFormatInfo, parse_wav

logger = logging.getLogger(__name__)

IDEAL_SAMPLE_RATE = 16000
MIN_DURATION_SECONDS = 4.0
MAX_RECOMMENDED_DURATION_SECONDS = 12.0
# Wording shown to users. The enforced minimum is MIN_DURATION_SECONDS.
RECOMMENDED_DURATION_TEXT = "5-12s"


class SampleWarning(str, Enum):
    NON_IDEAL_SAMPLE_RATE = "non_ideal_sample_rate"
    DURATION_OVER_RECOMMENDED = "duration_over_recommended"


class SampleTooShort(ValueError):
    code = "duration_too_short"

    def __init__(self, duration: float):
        self.duration = duration
        super().__init__(
            f"Audio too short ({duration:.1f}s), at least {MIN_DURATION_SECONDS:g}s required "
            f"({RECOMMENDED_DURATION_TEXT} recommended)"
        )


@dataclass(frozen=True)
class SampleReport:
    info: WaveFormatInfo
    warnings: Tuple[SampleWarning, ...] = field(default_factory=tuple)


def validate_clone_sample(buffer: bytes) -> SampleReport:
    """
    Decide whether an uploaded sample may be sent for cloning.

    Container errors and short clips are rejected by raising; an off-rate
    sample or an overly long clip is only reported as a warning.
    """
    info = parse_wav(buffer)

    if info.duration_seconds < MIN_DURATION_SECONDS:
        raise SampleTooShort(info.duration_seconds)

    warnings = []
    if info.sample_rate != IDEAL_SAMPLE_RATE:
        warnings.append(SampleWarning.NON_IDEAL_SAMPLE_RATE)
    if info.duration_seconds > MAX_RECOMMENDED_DURATION_SECONDS:
        warnings.append(SampleWarning.DURATION_OVER_RECOMMENDED)

    if warnings:
        logger.info(
            "Clone sample accepted with warnings %s (%d Hz, %.1fs)",
            [w.value for w in warnings], info.sample_rate, info.duration_seconds,
        )
    return SampleReport(info=info, warnings=tuple(warnings))
