"""Ziegler-Nichols PID auto-tuning against simulated I2C and IMU devices."""

from __future__ import annotations

import argparse
import itertools
import math
import time
from collections.abc import Callable, Iterable
from typing import TextIO

from dronesim.pid import PI

MOTOR_PIN = 9
MOTOR_LIMIT = 255
OSCILLATION_THRESHOLD = 2.0
DEFAULT_INTERVAL = 0.05

Reading = tuple[int, int, int]


class SensorConnectionError(Exception):
    """Raised when the IMU does not answer its connection test."""


class MockWire:
    """Stand-in for an I2C bus that reports each call it receives."""

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out

    def _say(self, message: str) -> None:
        print(message, file=self.out)

    def begin(self) -> None:
        self._say("Wire.begin() called (mock). ")

    def begin_transmission(self, address: int) -> None:
        self._say(f"Wire.beginTransmission({address & 0xFF}) called (mock).")

    def write(self, value: int) -> None:
        self._say(f"Wire.write({value & 0xFF}) called (mock). ")

    def end_transmission(self) -> None:
        self._say("Wire.endTransmission() called (mock). ")


class MockMPU6050:
    """Stand-in for an MPU-6050 accelerometer.

    By default it is level: acceleration (0, 0, 1000) milli-g. Other readings
    may be supplied; they are returned in turn and repeat once exhausted.
    """

    def __init__(
        self,
        readings: Iterable[Reading] = ((0, 0, 1000),),
        connected: bool = True,
        out: TextIO | None = None,
    ) -> None:
        values = list(readings)
        if not values:
            raise ValueError("at least one reading is required")
        self._readings = itertools.cycle(values)
        self.connected = connected
        self.out = out

    def _say(self, message: str) -> None:
        print(message, file=self.out)

    def initialize(self) -> None:
        self._say("MPU6050.initialize() called (mock).")

    def test_connection(self) -> bool:
        self._say("MPU6050.testConnection() called (mock).")
        return self.connected

    def get_acceleration(self) -> Reading:
        """Return the next (ax, ay, az) reading."""
        reading = next(self._readings)
        self._say("MPU6050.getAcceleration() called (mock).")
        return reading


def constrain(x: float, a: int, b: int) -> int:
    """Truncate ``x`` toward zero and limit it to the range [a, b]."""
    value = int(x)
    return a if value < a else b if value > b else value


def tilt_angle(ay: float, az: float) -> float:
    """Tilt in degrees computed from the Y and Z acceleration components."""
    return math.atan2(ay, az) * 180.0 / PI


def ziegler_nichols(ku: float, pu: float) -> tuple[float, float, float]:
    """Return (Kp, Ki, Kd) from the ultimate gain and oscillation period."""
    if pu == 0:
        raise ValueError("oscillation period must not be zero")
    kp = 0.6 * ku
    ki = 2 * kp / pu
    kd = kp * pu / 8
    return kp, ki, kd


class PIDAutoTune:
    """A PID motor controller that tunes its own gains from sensor readings."""

    def __init__(
        self,
        sensor: MockMPU6050 | None = None,
        wire: MockWire | None = None,
        *,
        out: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.out = out
        self.sensor = sensor if sensor is not None else MockMPU6050(out=out)
        self.wire = wire if wire is not None else MockWire(out=out)
        self._clock = clock
        self._sleep = sleep
        self.interval = interval
        self.kp = 1.0
        self.ki = 0.0
        self.kd = 0.0
        self.ku = 0.0
        self.pu = 0.0
        self.setpoint = 0.0
        self.input = 0.0
        self.output = 0.0
        self.previous_error = 0.0
        self.integral = 0.0
        self.auto_tune_mode = True

    def _say(self, message: str) -> None:
        print(message, file=self.out)

    def begin(self) -> None:
        """Start the bus and the sensor; raise SensorConnectionError if absent."""
        self.wire.begin()
        self.sensor.initialize()
        if not self.sensor.test_connection():
            raise SensorConnectionError("cannot connect to the MPU6050")

    def pid_control(self, value: float, delta_time: float) -> float:
        """Run one PID step for ``value`` over ``delta_time`` ms and return the output.

        With a zero time step the derivative term is taken as zero.
        """
        error = self.setpoint - value
        self.integral += error * delta_time
        derivative = (error - self.previous_error) / delta_time if delta_time else 0.0
        self.output = self.kp * error + self.ki * self.integral + self.kd * derivative
        self.previous_error = error
        return self.output

    def auto_tune(self, max_iterations: int | None = None) -> bool:
        """Search for oscillation, then set the gains by Ziegler-Nichols.

        Runs until the tilt jumps by more than two degrees between readings,
        or until ``max_iterations`` readings were taken. Returns True when the
        gains were tuned.
        """
        self.kp, self.ki, self.kd = 1.0, 0.0, 0.0
        found = False
        last_time = self._clock()
        previous_delta = 0
        last_angle = 0.0
        counter = itertools.count() if max_iterations is None else range(max_iterations)

        for _ in counter:
            now = self._clock()
            delta_ms = int((now - last_time) * 1000)
            last_time = now

            _, ay, az = self.sensor.get_acceleration()
            angle = tilt_angle(ay, az)
            angle_change = abs(angle - last_angle)
            last_angle = angle

            if angle_change > OSCILLATION_THRESHOLD and delta_ms > previous_delta:
                self.ku = self.kp
                previous_delta = delta_ms
                self.pu = float(delta_ms)
                found = True

            self.input = angle
            self.pid_control(angle, delta_ms)
            self.set_motor_speed(self.output)
            self._sleep(self.interval)
            if found:
                break

        if not found:
            return False

        self.kp, self.ki, self.kd = ziegler_nichols(self.ku, self.pu)
        self._say(
            f"Auto-tuning complete. PID parameters: Kp: {self.kp:f}, "
            f"Ki: {self.ki:f}, Kd: {self.kd:f}"
        )
        self.auto_tune_mode = False
        return True

    def set_motor_speed(self, speed: float) -> int:
        """Limit ``speed`` to ±255, send it to the motor pin and return it."""
        motor_speed = constrain(speed, -MOTOR_LIMIT, MOTOR_LIMIT)
        self._say(f"write to pin {MOTOR_PIN} with value: {motor_speed}")
        return motor_speed


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dronesim-autotune", description="PID motor control with auto-tuning."
    )
    parser.parse_args(argv)
    print("--- Project PID control motor and autotuning --- ")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())