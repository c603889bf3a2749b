import pytest

from dronesim.pid import PID, PWM_MAX, PWM_MIN, clamp, compute_target_angles, motor_pwm


def test_proportional_only_follows_error_sign():
    pid = PID(1.0, 0.0, 0.0)
    assert pid.update(5.0, 2.0, 0.1) > 0
    assert pid.update(2.0, 5.0, 0.1) < 0


def test_integral_accumulates_constant_error():
    pid = PID(0.0, 1.0, 0.0)
    first = pid.update(1.0, 0.0, 0.5)
    second = pid.update(1.0, 0.0, 0.5)
    assert second == pytest.approx(2 * first)
    assert pid.integral == pytest.approx(1.0)


def test_derivative_vanishes_for_steady_error():
    pid = PID(0.0, 0.0, 1.0)
    first = pid.update(3.0, 1.0, 0.1)
    second = pid.update(3.0, 1.0, 0.1)
    assert first > 0
    assert second == 0.0
    assert pid.prev_error == 2.0


def test_level_flight_has_no_tilt():
    assert compute_target_angles(0.0, 0.0, 9.81) == (0.0, 0.0)


def test_target_angles_are_antisymmetric():
    pitch, roll = compute_target_angles(1.0, 2.0, 9.81)
    neg_pitch, neg_roll = compute_target_angles(-1.0, -2.0, 9.81)
    assert pitch < 0 and roll < 0
    assert neg_pitch == pytest.approx(-pitch)
    assert neg_roll == pytest.approx(-roll)


def test_pitch_for_equal_forward_and_vertical_acceleration():
    pitch, roll = compute_target_angles(9.81, 0.0, 9.81)
    assert pitch == pytest.approx(-45.0, abs=1e-5)
    assert roll == 0.0


def test_zero_vector_is_rejected():
    with pytest.raises(ValueError):
        compute_target_angles(0.0, 0.0, 0.0)


@pytest.mark.parametrize(
    "value, low, high, expected",
    [
        (5, 0, 10, 5),
        (-3, 0, 10, 0),
        (15.7, 0, 10, 10),
        (3.9, 0, 10, 3),
        (-3.9, -20.0, 20.0, -3),
    ],
)
def test_clamp_truncates_then_limits(value, low, high, expected):
    assert clamp(value, low, high) == expected


def test_motor_pwm_neutral():
    assert motor_pwm(1500, 0.0, 0.0) == (1500, 1500, 1500, 1500)


def test_motor_pwm_saturates_at_limits():
    assert motor_pwm(1500, 1000.0, 0.0) == (PWM_MIN, PWM_MIN, PWM_MAX, PWM_MAX)


def test_motor_pwm_diagonal_pairs_balance():
    m1, m2, m3, m4 = motor_pwm(1500, 10.0, 6.0)
    assert m1 + m3 == 3000
    assert m2 + m4 == 3000
    assert m4 > m1