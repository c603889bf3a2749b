# dronesim

Small, self-contained simulations and helpers for experimenting with
multicopter control.

## Modules

- **`dronesim.pid`**: a `PID` controller (`update(setpoint, current, dt)`),
  `compute_target_angles(ax, ay, g)` returning the pitch and roll in degrees
  that tilt thrust towards a desired horizontal acceleration, `clamp`, which
  truncates to integers before clamping, and `motor_pwm`, the cross-frame mix
  for motors M1 (front left), M2 (front right), M3 (rear right) and
  M4 (rear left), each limited to 1100–1900.
- **`dronesim.drone`**: closed-loop runs built on those pieces.
  `simulate_attitude` is a generator of `AttitudeStep` records as the pitch
  and roll loops chase fixed targets. `simulate_position` flies from the
  origin to a target point, with tilt limited to ±20 degrees, and returns a
  list of `PositionStep` records together with the time the drone came within
  the tolerance of the target (or `None` if it never did).
- **`dronesim.motor`**: a `Motor` whose speed stays within 0–100
  (`set_speed` returns whether the value was applied), and a `MotorControl`
  that acts on pressed `Key`s at most every 100 ms (`handle_keys`), turns
  the shaft of a running motor (`update`) and reports `status_text()`.
  Geometry and colours come from a `MotorConfig`.
- **`dronesim.shapes`**: `Circle` and `Square` shapes that rotate by a number
  of degrees; a `Square` can orbit a rotation point (`rotate`, `offset`,
  `rotate_around_point`). `ShapeGround` groups an inner shape with outer
  ones and rotates them together.
- **`dronesim.autotune`**: `PIDAutoTune`, a Ziegler–Nichols tuner driven by a
  simulated sensor (`MockMPU6050`) and bus (`MockWire`), plus `constrain`,
  `tilt_angle` and `ziegler_nichols`. `begin()` raises
  `SensorConnectionError` when the sensor does not answer.
- **`dronesim.receiver`**: the receiver checks of a transmitter setup:
  `PulseDecoder` turns pin samples into pulse widths, `detect_stick` and
  `assign_channel` find and record a moved stick, `sticks_centered`,
  `receivers_valid` and `continue_requested` test channel positions, and
  `EndpointTracker` records the low and high ends of each channel. Failed
  steps raise `SetupError` with a numbered `code`.
- **`dronesim.gyro_setup`**: `identify_gyro` probes a register-reading
  callable for a known chip (`GyroType`), `integrate_angles` and
  `classify_gyro_axis` find the axis that was turned, `average_offsets`
  computes calibration offsets, and `encode_eeprom` / `decode_eeprom` pack a
  `SetupData` to and from a 36-byte EEPROM image.
- **`dronesim.trig`**: sympy-based simplification. `apply_sum_rules`
  contracts sine/cosine products into angle sums and differences;
  `simplify_expression` parses text and simplifies it, raising `ValueError`
  when it cannot be parsed.
- **`dronesim.wolfram`**: `build_query_url`, `parse_response` and `query` for
  the Wolfram|Alpha v2 query API; `query` takes an optional `opener` callable
  that fetches a URL. Failures raise `WolframError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

```
dronesim-drone [position|attitude] [--target-x X] [--target-y Y]
dronesim-trig [--rules] [EXPRESSION ...]
dronesim-wolfram [QUERY] [--app-id APP_ID]
```

- `dronesim-drone` prints each step of the position run (the default) or the
  attitude run.
- `dronesim-trig` simplifies the given expressions, or a built-in set of
  samples; with `--rules` it applies only the angle-sum identities.
- `dronesim-wolfram` sends a query and prints the input interpretation and
  the result. The application id is taken from `--app-id` or the
  `WOLFRAM_APP_ID` environment variable.

## Using the library

```python
from dronesim.pid import clamp, compute_target_angles

pitch, roll = compute_target_angles(1.0, 1.0, 9.81)
print(f"pitch {pitch:.2f} deg, roll {roll:.2f} deg")

print(clamp(2500, 1100, 1900))  # 1900
```

```python
from dronesim.drone import simulate_position

history, reached = simulate_position(2.0, 2.0)
print(len(history), reached)
```

```python
from dronesim.trig import apply_sum_rules

print(apply_sum_rules("sin(a)*cos(b) + sin(b)*cos(a)"))  # sin(a + b)
```

```python
from dronesim.motor import Key, MotorControl

control = MotorControl()
control.handle_keys({Key.S, Key.UP}, elapsed_ms=100)
control.update()
print(control.status_text())  # Motor is running. / Speed: 2%
```

## What it does not do

- Nothing is drawn: the motor and shape modules keep the state of their
  displays (positions, colours, rotations) but open no window.
- No hardware is accessed. The autotuner runs against the simulated sensor,
  and the receiver and gyro helpers work on values and callables you supply;
  there is no command that walks through a full setup on a real board.