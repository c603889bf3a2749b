"""PID controller and attitude helpers for an X-configuration quadcopter.

Motor layout, seen from above with the nose pointing up::

        M1     M2
            +
        M4     M3
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

PI = 3.14159265
PWM_MIN = 1100
PWM_MAX = 1900


@dataclass
class PID:
    """Textbook PID controller with an accumulated integral term."""

    kp: float
    ki: float
    kd: float
    prev_error: float = field(default=0.0, init=False)
    integral: float = field(default=0.0, init=False)

    def update(self, setpoint: float, current: float, dt: float) -> float:
        """Advance the controller by ``dt`` and return the control output."""
        error = setpoint - current
        self.integral += error * dt
        derivative = (error - self.prev_error) / dt
        self.prev_error = error
        return self.kp * error + self.ki * self.integral + self.kd * derivative


def compute_target_angles(ax: float, ay: float, g: float) -> tuple[float, float]:
    """Return the (pitch, roll) in degrees that tilts thrust towards (ax, ay).

    Raises ValueError when the acceleration vector is zero.
    """
    norm = math.sqrt(ax * ax + ay * ay + g * g)
    if norm == 0:
        raise ValueError("acceleration vector must not be zero")
    x = -ax / norm
    y = -ay / norm
    z = -g / norm
    pitch = math.asin(x) * 180.0 / PI
    roll = math.atan2(y, -z) * 180.0 / PI
    return pitch, roll


def clamp(value: float, min_val: float, max_val: float) -> int:
    """Truncate the arguments toward zero to integers, then clamp ``value``."""
    low, high = int(min_val), int(max_val)
    return max(low, min(int(value), high))


def motor_pwm(base_pwm: float, pitch_cmd: float, roll_cmd: float) -> tuple[int, int, int, int]:
    """Mix pitch and roll commands into PWM values for motors M1..M4."""
    return (
        clamp(base_pwm - pitch_cmd + roll_cmd, PWM_MIN, PWM_MAX),
        clamp(base_pwm - pitch_cmd - roll_cmd, PWM_MIN, PWM_MAX),
        clamp(base_pwm + pitch_cmd - roll_cmd, PWM_MIN, PWM_MAX),
        clamp(base_pwm + pitch_cmd + roll_cmd, PWM_MIN, PWM_MAX),
    )