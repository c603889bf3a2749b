import pytest

from dronesim.gyro_setup import (
    GyroType,
    SetupData,
    average_offsets,
    classify_gyro_axis,
    decode_eeprom,
    encode_eeprom,
    identify_gyro,
    integrate_angles,
)
from dronesim.receiver import SetupError


def _bus(answers):
    def read(address, register):
        return answers.get((address, register), 0)

    return read


def _data(**changes):
    values = dict(
        centers=(1500, 1500, 1500, 1500),
        highs=(1900, 1900, 1900, 1900),
        lows=(1100, 1100, 1100, 1100),
        assignments=(1, 0x82, 3, 4),
        roll_axis=1,
        pitch_axis=0x82,
        yaw_axis=3,
        gyro_type=GyroType.MPU6050,
        gyro_address=0x68,
    )
    values.update(changes)
    return SetupData(**values)


def test_identify_mpu6050_first_address():
    assert identify_gyro(_bus({(0x68, 0x75): 0x68})) == (GyroType.MPU6050, 0x68)


def test_identify_mpu6050_second_address():
    assert identify_gyro(_bus({(0x69, 0x75): 0x68})) == (GyroType.MPU6050, 0x69)


def test_identify_l3g4200d():
    assert identify_gyro(_bus({(0x69, 0x0F): 0xD3})) == (GyroType.L3G4200D, 0x69)


def test_identify_l3gd20h():
    assert identify_gyro(_bus({(0x6B, 0x0F): 0xD7})) == (GyroType.L3GD20H, 0x6B)


def test_identify_prefers_search_order():
    bus = _bus({(0x6A, 0x0F): 0xD7, (0x68, 0x0F): 0xD3})
    assert identify_gyro(bus) == (GyroType.L3G4200D, 0x68)


def test_identify_none_raises():
    with pytest.raises(SetupError) as info:
        identify_gyro(_bus({}))
    assert info.value.code == 3


@pytest.mark.parametrize(
    "angles, expected",
    [
        ((45.0, 0.0, 0.0), 0b00000001),
        ((-45.0, 0.0, 0.0), 0b10000001),
        ((0.0, 45.0, 0.0), 0b00000010),
        ((0.0, -45.0, 0.0), 0b10000010),
        ((0.0, 0.0, 45.0), 0b00000011),
        ((0.0, 0.0, -45.0), 0b10000011),
    ],
)
def test_classify_axis(angles, expected):
    assert classify_gyro_axis(*angles) == expected


@pytest.mark.parametrize("angles", [(0.0, 0.0, 0.0), (45.0, 45.0, 0.0), (30.0, 0.0, 0.0)])
def test_classify_without_single_motion_raises(angles):
    with pytest.raises(SetupError) as info:
        classify_gyro_axis(*angles)
    assert info.value.code == 4


def test_integrate_uses_mpu_scale():
    roll, pitch, yaw = integrate_angles([(1.0, 0.0, 0.0)], GyroType.MPU6050)
    assert roll == pytest.approx(0.0000611)
    assert (pitch, yaw) == (0.0, 0.0)


def test_integrate_uses_l3g_scale():
    roll, _, _ = integrate_angles([(1.0, 0.0, 0.0)], GyroType.L3GD20H)
    assert roll == pytest.approx(0.00007)


def test_integrate_stops_after_leaving_band():
    big = (1_000_000.0, 0.0, 0.0)
    first = integrate_angles([big], GyroType.MPU6050)
    many = integrate_angles([big, big, big], GyroType.MPU6050)
    assert many == first
    assert first[0] > 30


def test_integrate_then_classify():
    samples = [(0.0, -100_000.0, 0.0)] * 20
    angles = integrate_angles(samples, GyroType.L3G4200D)
    assert classify_gyro_axis(*angles) == 0b10000010


def test_average_offsets():
    assert average_offsets([(1, 2, 3), (3, 4, 5)]) == (2, 3, 4)


def test_average_offsets_constant_samples():
    assert average_offsets([(7.5, -2.0, 0.25)] * 10) == pytest.approx((7.5, -2.0, 0.25))


def test_average_offsets_empty_raises():
    with pytest.raises(ValueError):
        average_offsets([])


def test_encode_layout():
    raw = encode_eeprom(_data(centers=(0x05DC, 1500, 1500, 1500)))
    assert len(raw) == 36
    assert raw[0] == 0xDC and raw[1] == 0x05
    assert raw[33:36] == b"JMB"
    assert raw[31] == 1
    assert raw[32] == 0x68
    assert raw[25] == 0x82


def test_round_trip():
    data = _data(gyro_type=GyroType.L3GD20H, gyro_address=0x6B)
    assert decode_eeprom(encode_eeprom(data)) == data


def test_encode_out_of_range_raises():
    with pytest.raises(SetupError) as info:
        encode_eeprom(_data(highs=(70000, 1900, 1900, 1900)))
    assert info.value.code == 5


def test_decode_bad_signature_raises():
    raw = bytearray(encode_eeprom(_data()))
    raw[35] = ord("X")
    with pytest.raises(ValueError):
        decode_eeprom(bytes(raw))


def test_decode_short_raises():
    with pytest.raises(ValueError):
        decode_eeprom(encode_eeprom(_data())[:30])


def test_decode_unknown_gyro_type_raises():
    raw = bytearray(encode_eeprom(_data()))
    raw[31] = 9
    with pytest.raises(ValueError):
        decode_eeprom(bytes(raw))


def test_setup_data_requires_four_channels():
    with pytest.raises(ValueError):
        _data(centers=(1500, 1500))