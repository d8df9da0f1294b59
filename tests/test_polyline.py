import pytest

from hover_tracks.config import InvalidConfiguration
from hover_tracks.polyline import DecodeError, decode, encode

REFERENCE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
REFERENCE_ENCODING = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def test_encode_matches_reference_string():
    assert encode(REFERENCE_POINTS) == REFERENCE_ENCODING


def test_decode_matches_reference_points():
    decoded = decode(REFERENCE_ENCODING)
    assert len(decoded) == 3
    for (lat, lon), (exp_lat, exp_lon) in zip(decoded, REFERENCE_POINTS):
        assert lat == pytest.approx(exp_lat, abs=1e-5)
        assert lon == pytest.approx(exp_lon, abs=1e-5)


def test_round_trip_within_precision():
    points = [(51.50722, -0.1275), (51.508, -0.12801), (-33.86785, 151.20732), (0.0, 0.0)]
    for (lat, lon), (exp_lat, exp_lon) in zip(decode(encode(points)), points):
        assert abs(lat - exp_lat) <= 1e-5
        assert abs(lon - exp_lon) <= 1e-5


def test_decode_is_deterministic():
    assert decode(REFERENCE_ENCODING) == decode(REFERENCE_ENCODING)


def test_empty_string_decodes_to_no_points():
    assert decode("") == []
    assert encode([]) == ""


def test_truncated_value_raises():
    with pytest.raises(DecodeError) as excinfo:
        decode(REFERENCE_ENCODING[:-1])
    assert excinfo.value.position == len(REFERENCE_ENCODING) - 1


def test_latitude_without_longitude_raises():
    with pytest.raises(DecodeError):
        decode("_p~iF")


def test_invalid_character_raises():
    with pytest.raises(DecodeError) as excinfo:
        decode("_p~iF ps|U")
    assert excinfo.value.position == 5


def test_non_string_raises():
    with pytest.raises(DecodeError):
        decode(None)


def test_precision_six():
    points = [(38.5, -120.2), (40.7, -120.95)]
    decoded = decode(encode(points, precision=6), precision=6)
    assert decoded[1][0] == pytest.approx(40.7, abs=1e-6)


def test_negative_precision_rejected():
    with pytest.raises(InvalidConfiguration):
        encode(REFERENCE_POINTS, precision=-1)
