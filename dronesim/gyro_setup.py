"""Gyro detection, axis calibration and EEPROM layout for quadcopter setup."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from dronesim.receiver import CHANNEL_COUNT, SetupError

Rates = tuple[float, float, float]

AXIS_LIMIT = 30.0
EEPROM_SIZE = 36
SIGNATURE = b"JMB"
_SIGNATURE_OFFSET = 33

ROLL_AXIS = 0b00000001
PITCH_AXIS = 0b00000010
YAW_AXIS = 0b00000011
AXIS_INVERTED = 0b10000000


class GyroType(enum.IntEnum):
    """Supported gyro chips, numbered as stored in the EEPROM."""

    MPU6050 = 1
    L3G4200D = 2
    L3GD20H = 3

    @property
    def degrees_per_count(self) -> float:
        """Angle per raw count for one sample at the 250 Hz loop rate."""
        # MPU-6050: 1 / 65.5 LSB per deg/s / 250 Hz; L3G: 17.5 mdps / 250 Hz.
        return 0.0000611 if self is GyroType.MPU6050 else 0.00007


# (address, who-am-i register, expected answer, chip), in search order.
_SEARCH_ORDER = (
    (0x68, 0x75, 0x68, GyroType.MPU6050),
    (0x69, 0x75, 0x68, GyroType.MPU6050),
    (0x68, 0x0F, 0xD3, GyroType.L3G4200D),
    (0x69, 0x0F, 0xD3, GyroType.L3G4200D),
    (0x6A, 0x0F, 0xD7, GyroType.L3GD20H),
    (0x6B, 0x0F, 0xD7, GyroType.L3GD20H),
)


def identify_gyro(read_register: Callable[[int, int], int]) -> tuple[GyroType, int]:
    """Probe the known addresses and return the chip found and its address.

    ``read_register(address, register)`` returns the byte read from the bus.
    Raises SetupError when no chip answers with its identity.
    """
    for address, register, expected, gyro_type in _SEARCH_ORDER:
        if read_register(address, register) == expected:
            return gyro_type, address
    raise SetupError(3, "No gyro device found!!!")


def _within(angle: float) -> bool:
    return -AXIS_LIMIT < angle < AXIS_LIMIT


def _beyond(angle: float) -> bool:
    return angle < -AXIS_LIMIT or angle > AXIS_LIMIT


def classify_gyro_axis(roll: float, pitch: float, yaw: float) -> int:
    """Return the axis byte for the one gyro axis turned past 30 degrees.

    The low bits name the axis (1 roll, 2 pitch, 3 yaw) and bit 7 marks a
    negative turn. Raises SetupError when not exactly one axis moved.
    """
    axis = 0
    if _beyond(roll) and _within(pitch) and _within(yaw):
        axis = ROLL_AXIS | (AXIS_INVERTED if roll < 0 else 0)
    if _beyond(pitch) and _within(roll) and _within(yaw):
        axis = PITCH_AXIS | (AXIS_INVERTED if pitch < 0 else 0)
    if _beyond(yaw) and _within(roll) and _within(pitch):
        axis = YAW_AXIS | (AXIS_INVERTED if yaw < 0 else 0)
    if axis == 0:
        raise SetupError(4, "No angular motion is detected in the last 10 seconds!!!")
    return axis


def integrate_angles(samples: Iterable[Rates], gyro_type: GyroType) -> Rates:
    """Integrate rate samples into angles until one leaves the ±30 degree band.

    Samples after the one that took an angle out of the band are not read.
    """
    scale = GyroType(gyro_type).degrees_per_count
    roll = pitch = yaw = 0.0
    for rate_roll, rate_pitch, rate_yaw in samples:
        if not (_within(roll) and _within(pitch) and _within(yaw)):
            break
        roll += rate_roll * scale
        pitch += rate_pitch * scale
        yaw += rate_yaw * scale
    return roll, pitch, yaw


def average_offsets(samples: Iterable[Rates]) -> Rates:
    """Average resting gyro readings into per-axis offsets."""
    readings = list(samples)
    if not readings:
        raise ValueError("at least one sample is required")
    count = len(readings)
    roll, pitch, yaw = (sum(axis) / count for axis in zip(*readings))
    return roll, pitch, yaw


def _four(values: Sequence[int], name: str) -> tuple[int, ...]:
    result = tuple(values)
    if len(result) != CHANNEL_COUNT:
        raise ValueError(f"{name} must hold {CHANNEL_COUNT} values, got {len(result)}")
    return result


@dataclass(frozen=True)
class SetupData:
    """Everything the setup stores for the flight controller."""

    centers: tuple[int, ...]
    highs: tuple[int, ...]
    lows: tuple[int, ...]
    assignments: tuple[int, ...]
    roll_axis: int
    pitch_axis: int
    yaw_axis: int
    gyro_type: GyroType
    gyro_address: int

    def __post_init__(self) -> None:
        for name in ("centers", "highs", "lows", "assignments"):
            object.__setattr__(self, name, _four(getattr(self, name), name))
        object.__setattr__(self, "gyro_type", GyroType(self.gyro_type))


def _layout(data: SetupData) -> bytes:
    out = bytearray()
    for values in (data.centers, data.highs, data.lows):
        for value in values:
            out.append(value & 0xFF)
            out.append((value >> 8) & 0xFF)
    for value in (
        *data.assignments,
        data.roll_axis,
        data.pitch_axis,
        data.yaw_axis,
        int(data.gyro_type),
        data.gyro_address,
    ):
        out.append(value & 0xFF)
    out += SIGNATURE
    return bytes(out)


def encode_eeprom(data: SetupData) -> bytes:
    """Lay out ``data`` as the 36 EEPROM bytes, verifying they read back.

    Raises SetupError when a value does not survive the round trip.
    """
    raw = _layout(data)
    try:
        verified = decode_eeprom(raw) == data
    except ValueError:
        verified = False
    if not verified:
        raise SetupError(5, "EEPROM verification failed!!!")
    return raw


def decode_eeprom(raw: bytes) -> SetupData:
    """Read setup data back from EEPROM bytes; ValueError if they are not valid."""
    raw = bytes(raw)
    if len(raw) < EEPROM_SIZE:
        raise ValueError(f"EEPROM image must hold {EEPROM_SIZE} bytes, got {len(raw)}")
    if raw[_SIGNATURE_OFFSET:EEPROM_SIZE] != SIGNATURE:
        raise ValueError("EEPROM signature missing")

    words = [raw[i] | (raw[i + 1] << 8) for i in range(0, 24, 2)]
    try:
        gyro_type = GyroType(raw[31])
    except ValueError as exc:
        raise ValueError(f"unknown gyro type {raw[31]}") from exc
    return SetupData(
        centers=tuple(words[0:4]),
        highs=tuple(words[4:8]),
        lows=tuple(words[8:12]),
        assignments=tuple(raw[24:28]),
        roll_axis=raw[28],
        pitch_axis=raw[29],
        yaw_axis=raw[30],
        gyro_type=gyro_type,
        gyro_address=raw[32],
    )