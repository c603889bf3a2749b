"""Simulations and helpers for multicopter control: PID loops, drone, motor and
shape models, PID autotuning, receiver and gyro setup, and trigonometric
simplification."""

__version__ = "1.0.0"