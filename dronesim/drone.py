"""Simple quadcopter simulations: attitude tracking and flying to a point."""

from __future__ import annotations

import argparse
import math
from collections.abc import Iterator
from dataclasses import dataclass

from dronesim.pid import PI, PID, clamp, compute_target_angles, motor_pwm

MAX_TILT = 20.0


@dataclass(frozen=True)
class AttitudeStep:
    """State after one step of the attitude simulation."""

    time: float
    pitch: float
    roll: float
    pwm: tuple[int, int, int, int]


@dataclass(frozen=True)
class PositionStep:
    """State after one step of the position simulation."""

    time: float
    x: float
    y: float
    pitch: float
    roll: float
    pwm: tuple[int, int, int, int]


def attitude_targets(ax: float, ay: float, g: float) -> tuple[float, float]:
    """Target (pitch, roll) used by the attitude simulation; roll is mirrored."""
    pitch, roll = compute_target_angles(ax, ay, g)
    return pitch, -roll


def simulate_attitude(
    ax: float = 1.0,
    ay: float = 1.0,
    g: float = 9.81,
    dt: float = 0.1,
    steps: int = 50,
    base_pwm: int = 1500,
) -> Iterator[AttitudeStep]:
    """Yield the attitude as pitch and roll PID loops chase fixed targets."""
    pid_pitch = PID(1.0, 0.0, 0.2)
    pid_roll = PID(1.0, 0.0, 0.2)
    pitch_target, roll_target = attitude_targets(ax, ay, g)
    pitch = roll = 0.0
    for i in range(steps):
        pitch_cmd = pid_pitch.update(pitch_target, pitch, dt)
        roll_cmd = pid_roll.update(roll_target, roll, dt)
        pitch += pitch_cmd * dt
        roll += roll_cmd * dt
        yield AttitudeStep(i * dt, pitch, roll, motor_pwm(base_pwm, pitch_cmd, roll_cmd))


def simulate_position(
    target_x: float = 2.0,
    target_y: float = 2.0,
    dt: float = 0.03,
    g: float = 9.81,
    base_pwm: int = 1500,
    max_steps: int = 1000,
    tolerance: float = 0.1,
) -> tuple[list[PositionStep], float | None]:
    """Fly from the origin towards a target point.

    Returns the recorded steps and the time at which the drone came within
    ``tolerance`` of the target, or None if it never did.
    """
    pid_x = PID(1.2, 0.0, 0.4)
    pid_y = PID(1.2, 0.0, 0.4)
    pid_pitch = PID(1.0, 0.0, 0.2)
    pid_roll = PID(1.0, 0.0, 0.2)

    pos_x = pos_y = 0.0
    vel_x = vel_y = 0.0
    pitch = roll = 0.0
    history: list[PositionStep] = []

    for i in range(max_steps):
        distance = math.hypot(target_x - pos_x, target_y - pos_y)
        if distance < tolerance:
            return history, i * dt

        ax = pid_x.update(target_x, pos_x, dt)
        ay = pid_y.update(target_y, pos_y, dt)

        pitch_target, roll_target = compute_target_angles(ax, ay, g)
        pitch_target = clamp(pitch_target, -MAX_TILT, MAX_TILT)
        roll_target = clamp(roll_target, -MAX_TILT, MAX_TILT)

        pitch_cmd = pid_pitch.update(pitch_target, pitch, dt)
        roll_cmd = pid_roll.update(roll_target, roll, dt)
        pitch += pitch_cmd * dt
        roll += roll_cmd * dt

        vel_x += -math.sin(pitch * PI / 180.0) * g * dt
        vel_y += -math.sin(roll * PI / 180.0) * g * dt
        pos_x += vel_x * dt
        pos_y += vel_y * dt

        history.append(
            PositionStep(i * dt, pos_x, pos_y, pitch, roll, motor_pwm(base_pwm, pitch_cmd, roll_cmd))
        )
    return history, None


def _pwm_line(pwm: tuple[int, int, int, int]) -> str:
    m1, m2, m3, m4 = pwm
    return f"  PWM M1: {m1} | M2: {m2} | M3: {m3} | M4: {m4}\n"


def _run_attitude() -> None:
    pitch_target, roll_target = attitude_targets(1.0, 1.0, 9.81)
    print(f"Desired Pitch: {pitch_target:g} deg")
    print(f"Desired Roll: {roll_target:g} deg\n")
    for step in simulate_attitude():
        print(f"Time: {step.time:g}s | Pitch: {step.pitch:g} | Roll: {step.roll:g}")
        print(_pwm_line(step.pwm))


def _run_position(target_x: float, target_y: float) -> None:
    print(f"The drone will fly to the point ({target_x:g}, {target_y:g})\n")
    history, reached = simulate_position(target_x, target_y)
    for step in history:
        print(
            f"Time: {step.time:g}s | Pos: ({step.x:g}, {step.y:g}) "
            f"| Pitch: {step.pitch:g} | Roll: {step.roll:g}"
        )
        print(_pwm_line(step.pwm))
    if reached is not None:
        print(f" Drone reached the target position at time {reached:g}s!")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="dronesim-drone", description="Quadcopter PID simulations.")
    parser.add_argument("mode", nargs="?", choices=("position", "attitude"), default="position")
    parser.add_argument("--target-x", type=float, default=2.0)
    parser.add_argument("--target-y", type=float, default=2.0)
    args = parser.parse_args(argv)
    if args.mode == "attitude":
        _run_attitude()
    else:
        _run_position(args.target_x, args.target_y)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())