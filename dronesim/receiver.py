"""Radio receiver checks used while setting up a quadcopter transmitter.

Channels are the pulse widths, in microseconds, of receiver inputs 1 to 4
(digital inputs 8 to 11). A stick assignment byte holds the channel number
in its low three bits and sets bit 7 when the channel is inverted.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

CHANNEL_COUNT = 4
ALL_CHANNELS = 0b00001111
INVERTED = 0b10000000
CHANNEL_MASK = 0b00000111

STICK_LOW = 1250
STICK_HIGH = 1750
CENTER_TOLERANCE = 20
CONTINUE_THRESHOLD = 150
VALID_MIN = 900
VALID_MAX = 2100

_TIMER_MASK = 0xFFFFFFFF


class SetupError(Exception):
    """A setup step failed; ``code`` is the numbered setup error."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"{message} (ERROR {code})")
        self.code = code


def _check(channels: Sequence[int], name: str = "channels") -> Sequence[int]:
    if len(channels) != CHANNEL_COUNT:
        raise ValueError(f"{name} must hold {CHANNEL_COUNT} values, got {len(channels)}")
    return channels


class PulseDecoder:
    """Measures receiver pulse widths from pin-change samples.

    ``update`` is fed the state of the four input pins as a bit mask (bit 0 is
    channel 1) together with a microsecond timestamp. A channel's width is
    the time between its rising and its falling edge.
    """

    def __init__(self) -> None:
        self._last = [False] * CHANNEL_COUNT
        self._rise = [0] * CHANNEL_COUNT
        self.channels = [0] * CHANNEL_COUNT

    def update(self, pin_state: int, now_us: int) -> tuple[int, int, int, int]:
        """Process one pin sample and return the current channel widths."""
        for channel, was_high in enumerate(self._last):
            high = bool(pin_state & (1 << channel))
            if high and not was_high:
                self._last[channel] = True
                self._rise[channel] = now_us
            elif not high and was_high:
                self._last[channel] = False
                self.channels[channel] = (now_us - self._rise[channel]) & _TIMER_MASK
        return tuple(self.channels)  # type: ignore[return-value]


@dataclass(frozen=True)
class StickDetection:
    """A stick found away from its centre.

    ``trigger`` is the channel number (1..4), ``pulse_length`` its width and
    ``check_bits`` the mask of every channel found out of the centre band.
    """

    trigger: int
    pulse_length: int
    check_bits: int


def detect_stick(channels: Sequence[int]) -> StickDetection | None:
    """Find a channel pushed beyond 1250..1750 µs; the highest such channel wins."""
    found: StickDetection | None = None
    bits = 0
    for number, width in enumerate(_check(channels), 1):
        if width > STICK_HIGH or width < STICK_LOW:
            bits |= 1 << (number - 1)
            found = StickDetection(number, width, bits)
    if found is None:
        return None
    return StickDetection(found.trigger, found.pulse_length, bits)


def assign_channel(trigger: int, pulse_length: int) -> int:
    """Build the assignment byte for a detected stick.

    The inverted bit is set when the stick moved to a short pulse. A zero
    trigger means no stick moved and raises SetupError.
    """
    if trigger == 0:
        raise SetupError(2, "No stick movement detected in the last 30 seconds!!!")
    if not 1 <= trigger <= CHANNEL_COUNT:
        raise ValueError(f"trigger must be between 1 and {CHANNEL_COUNT}, got {trigger}")
    return trigger | INVERTED if pulse_length < STICK_LOW else trigger


def sticks_centered(channels: Sequence[int], centers: Sequence[int]) -> int:
    """Return the mask of channels within 20 µs of their centre (exclusive)."""
    mask = 0
    for bit, (width, center) in enumerate(zip(_check(channels), _check(centers, "centers"))):
        if center - CENTER_TOLERANCE < width < center + CENTER_TOLERANCE:
            mask |= 1 << bit
    return mask


def receivers_valid(channels: Sequence[int]) -> int:
    """Return the mask of channels whose width lies strictly inside 900..2100 µs."""
    mask = 0
    for bit, width in enumerate(_check(channels)):
        if VALID_MIN < width < VALID_MAX:
            mask |= 1 << bit
    return mask


def continue_requested(pitch_assign: int, channels: Sequence[int], centers: Sequence[int]) -> bool:
    """Whether the pitch stick is pushed 'nose up' by more than 150 µs.

    ``pitch_assign`` is the pitch channel's assignment byte; any byte that
    names no channel never requests continuing.
    """
    _check(channels)
    _check(centers, "centers")
    if pitch_assign & ~(INVERTED | CHANNEL_MASK):
        return False
    number = pitch_assign & CHANNEL_MASK
    if not 1 <= number <= CHANNEL_COUNT:
        return False
    width = channels[number - 1]
    center = centers[number - 1]
    if pitch_assign & INVERTED:
        return width < center - CONTINUE_THRESHOLD
    return width > center + CONTINUE_THRESHOLD


@dataclass
class EndpointTracker:
    """Records the lowest and highest width of each channel.

    Lows start at the widths current when tracking begins, highs at zero.
    Measuring starts once channel 1 leaves its centre, and ends when every
    channel has been seen back at its centre.
    """

    start: Sequence[int]
    centers: Sequence[int]
    low: list[int] = field(init=False)
    high: list[int] = field(init=False)
    measuring: bool = field(default=False, init=False)
    centered: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        _check(self.start, "start")
        _check(self.centers, "centers")
        self.low = list(self.start)
        self.high = [0] * CHANNEL_COUNT

    @property
    def done(self) -> bool:
        return self.centered >= ALL_CHANNELS

    def observe(self, channels: Sequence[int]) -> bool:
        """Take one reading; return True once all sticks are back at centre."""
        _check(channels)
        if self.done:
            return True
        if not self.measuring:
            if sticks_centered(channels, self.centers) & 1:
                return False
            self.measuring = True
        self.centered |= sticks_centered(channels, self.centers)
        self.low = [min(low, width) for low, width in zip(self.low, channels)]
        self.high = [max(high, width) for high, width in zip(self.high, channels)]
        return self.done