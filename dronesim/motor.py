"""State model of a DC motor with keyboard speed control and a rotating shaft."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field

Vector = tuple[float, float]

SPEED_MIN = 0
SPEED_MAX = 100
SPEED_STEP = 2
INPUT_INTERVAL_MS = 100
ROTATION_GAIN = 0.023
SHAFT_THICKNESS = 5.0
SHAFT_ORIGIN: Vector = (0.0, 2.0)


class Color(enum.Enum):
    """Fill colours used by the motor display, as RGB triples."""

    GREEN = (0, 255, 0)
    RED = (255, 0, 0)
    BLACK = (0, 0, 0)
    WHITE = (255, 255, 255)


class Key(enum.Enum):
    """Keys the motor control reacts to."""

    S = "start"
    T = "stop"
    UP = "faster"
    DOWN = "slower"


@dataclass(frozen=True)
class MotorConfig:
    """Geometry and colours of the motor display."""

    motor_circle_radius: float = 50.0
    motor_circle_color: Color = Color.GREEN
    motor_circle_position: Vector = (350.0, 250.0)
    motor_shaft_size: Vector = (100.0, 5.0)
    motor_shaft_color: Color = Color.BLACK
    motor_shaft_position: Vector = (400.0, 300.0)
    font_size: int = 24
    text_color: Color = Color.WHITE
    text_position: Vector = (10.0, 10.0)


class Motor:
    """A motor that can run or stand still at a speed from 0 to 100."""

    def __init__(self) -> None:
        self.is_running = False
        self._speed = SPEED_MIN

    @property
    def speed(self) -> int:
        return self._speed

    def start(self) -> None:
        self.is_running = True

    def stop(self) -> None:
        self.is_running = False

    def set_speed(self, new_speed: int) -> bool:
        """Set the speed if it lies within 0..100; return whether it was applied."""
        if SPEED_MIN <= new_speed <= SPEED_MAX:
            self._speed = new_speed
            return True
        return False


@dataclass
class Circle:
    radius: float
    color: Color
    position: Vector


@dataclass
class Shaft:
    size: Vector
    color: Color
    position: Vector
    origin: Vector = SHAFT_ORIGIN
    rotation: float = 0.0


@dataclass
class StatusLabel:
    font_size: int
    color: Color
    position: Vector


class MotorControl:
    """Drives a motor from key presses and tracks the state of its display.

    The body circle takes its radius, colour and position from the shaft
    settings of the configuration, and the shaft takes its length (the
    circle's diameter), colour and position from the circle settings.
    """

    def __init__(self, config: MotorConfig | None = None) -> None:
        config = config or MotorConfig()
        self.motor = Motor()
        self.rotation_angle = 0.0
        self._elapsed_ms = 0.0
        self.circle = Circle(
            radius=config.motor_shaft_size[0],
            color=config.motor_shaft_color,
            position=config.motor_shaft_position,
        )
        self.shaft = Shaft(
            size=(config.motor_circle_radius * 2, SHAFT_THICKNESS),
            color=config.motor_circle_color,
            position=config.motor_circle_position,
        )
        self.label = StatusLabel(config.font_size, config.text_color, config.text_position)

    def handle_keys(self, pressed: Iterable[Key], elapsed_ms: float) -> bool:
        """Account for ``elapsed_ms`` and act on ``pressed`` at most every 100 ms.

        Returns True when the keys were processed.
        """
        self._elapsed_ms += elapsed_ms
        if self._elapsed_ms < INPUT_INTERVAL_MS:
            return False
        self._elapsed_ms = 0.0

        keys = set(pressed)
        motor = self.motor
        if Key.S in keys:
            motor.start()
            self.circle.color = Color.GREEN
        if Key.T in keys:
            motor.stop()
            self.circle.color = Color.RED
        if Key.UP in keys:
            motor.set_speed(motor.speed + SPEED_STEP)
            if motor.speed > SPEED_MAX:
                motor.set_speed(SPEED_MAX)
        if Key.DOWN in keys:
            motor.set_speed(motor.speed - SPEED_STEP)
            if motor.speed < SPEED_MIN:
                motor.set_speed(SPEED_MIN)
        return True

    def update(self) -> None:
        """Advance the shaft rotation of a running motor by one frame."""
        if not self.motor.is_running:
            return
        self.rotation_angle += self.motor.speed * self.motor.speed * ROTATION_GAIN
        if self.rotation_angle >= 360:
            self.rotation_angle = 0.0
        self.shaft.rotation = self.rotation_angle

    def status_text(self) -> str:
        """Text describing whether the motor runs and at what speed."""
        state = "running" if self.motor.is_running else "stopped"
        return f"Motor is {state}.\nSpeed: {self.motor.speed}%"