import pytest

from abbrws.exceptions import DecodeError
from abbrws.models.status import ErrorStatus
from abbrws.parse.envelope import parse_error, parse_list, parse_one, reinterpret_error_code

BAD_SIGNAL_STATUS = ErrorStatus(code=0xC0048409, message="Signal not found")


def test_parse_one_error_envelope(load_fixture) -> None:
    assert parse_one(load_fixture("bad_signal.json")) == BAD_SIGNAL_STATUS


def test_parse_list_error_envelope(load_fixture) -> None:
    assert parse_list(load_fixture("bad_signal.json")) == BAD_SIGNAL_STATUS


def test_parse_error(load_fixture) -> None:
    status = parse_error(load_fixture("bad_signal.json"))

    assert status.code == 3221521417
    assert status.message == "Signal not found"


def test_parse_one_returns_single_record(load_fixture) -> None:
    record = parse_one(load_fixture("good_signal.json"))

    assert isinstance(record, dict)
    assert record["_title"] == "Local/PANEL/SS2"


def test_parse_list_returns_records(load_fixture) -> None:
    records = parse_list(load_fixture("signals.json"))

    assert isinstance(records, list)
    assert len(records) == 5


def test_parse_list_empty_state() -> None:
    assert parse_list(b'{"_embedded": {"_state": []}}') == []


def test_state_is_preferred_over_status() -> None:
    data = b'{"_embedded": {"_state": [{"a": 1}], "status": {"code": 1, "msg": "x"}}}'

    assert parse_one(data) == {"a": 1}
    assert parse_list(data) == [{"a": 1}]


def test_parse_one_empty_state_falls_back_to_status() -> None:
    data = b'{"_embedded": {"_state": [], "status": {"code": -1, "msg": "gone"}}}'

    assert parse_one(data) == ErrorStatus(code=0xFFFFFFFF, message="gone")


def test_parse_one_empty_state_without_status() -> None:
    with pytest.raises(DecodeError, match="missing field `_state`"):
        parse_one(b'{"_embedded": {"_state": []}}')


def test_parse_one_rejects_multiple_records() -> None:
    with pytest.raises(DecodeError, match="invalid length 2"):
        parse_one(b'{"_embedded": {"_state": [{}, {}]}}')


@pytest.mark.parametrize(
    ("data", "message"),
    [
        (b"not json", "invalid JSON"),
        (b"\xff", "invalid JSON"),
        (b"[]", "expected an object"),
        (b"{}", "missing field `_embedded`"),
        (b'{"_embedded": []}', "invalid type for `_embedded`"),
        (b'{"_embedded": {}}', "missing field `_state`"),
        (b'{"_embedded": {"_state": null}}', "missing field `_state`"),
        (b'{"_embedded": {"_state": {}}}', "expected a sequence"),
        (b'{"_embedded": {"_state": [1]}}', "invalid type for record"),
        (b'{"_embedded": {"status": {"msg": "x"}}}', "missing field `code`"),
        (b'{"_embedded": {"status": {"code": 1}}}', "missing field `msg`"),
        (b'{"_embedded": {"status": {"code": "1", "msg": "x"}}}', "invalid type for `code`"),
        (b'{"_embedded": {"status": {"code": true, "msg": "x"}}}', "invalid type for `code`"),
        (b'{"_embedded": {"status": {"code": 1, "msg": 2}}}', "invalid type for `msg`"),
        (b'{"_embedded": {"status": {"code": 4294967296, "msg": "x"}}}', "out of range"),
    ],
)
def test_parse_list_malformed(data: bytes, message: str) -> None:
    with pytest.raises(DecodeError, match=message):
        parse_list(data)


def test_parse_error_without_status() -> None:
    with pytest.raises(DecodeError, match="missing field `status`"):
        parse_error(b'{"_embedded": {"_state": []}}')


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (0, 0),
        (1, 1),
        (-1, 0xFFFFFFFF),
        (-1073445879, 0xC0048409),
        (2147483647, 0x7FFFFFFF),
        (-2147483648, 0x80000000),
    ],
)
def test_reinterpret_error_code(code: int, expected: int) -> None:
    assert reinterpret_error_code(code) == expected


def test_reinterpret_error_code_out_of_range() -> None:
    with pytest.raises(DecodeError):
        reinterpret_error_code(1 << 31)
