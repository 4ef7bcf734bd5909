import pytest

from bencodec.errors import BencodeValueError, DecodeErrorKind
from bencodec.structure import (
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    to_bencode,
    to_key_bytes,
)


def test_int_rejects_non_integers():
    with pytest.raises(TypeError):
        BencodeInt("42")
    with pytest.raises(TypeError):
        BencodeInt(True)


def test_string_stores_bytes():
    assert BencodeString(bytearray(b"ab")).value == b"ab"
    assert BencodeString(memoryview(b"ab")).value == b"ab"
    assert BencodeString("hé").value == b"h\xc3\xa9"
    with pytest.raises(TypeError):
        BencodeString(5)


def test_string_text():
    assert BencodeString(b"spam").text() == "spam"
    assert BencodeString(b"\xe9").text("latin-1") == "é"


def test_string_text_rejects_invalid_utf8():
    with pytest.raises(BencodeValueError):
        BencodeString(b"\xff\xfe").text()


def test_list_requires_bencode_items():
    assert len(BencodeList([BencodeInt(1), BencodeInt(2)])) == 2
    with pytest.raises(TypeError):
        BencodeList([1, 2])
    with pytest.raises(TypeError):
        BencodeList(b"ab")


def test_dict_sorts_and_normalizes_keys():
    d = BencodeDict({"foo": BencodeInt(1), b"bar": BencodeInt(2), BencodeString(b"baz"): BencodeInt(3)})
    assert list(d.keys()) == [b"bar", b"baz", b"foo"]
    assert d["foo"] == BencodeInt(1)
    assert d[b"bar"] == BencodeInt(2)
    assert "baz" in d
    assert 3 not in d
    assert d.get(b"missing") is None


def test_dict_rejects_duplicate_keys():
    with pytest.raises(BencodeValueError) as info:
        BencodeDict([(b"a", BencodeInt(1)), (b"a", BencodeInt(2))])
    assert info.value.kind is DecodeErrorKind.DUPLICATE_KEY

    with pytest.raises(BencodeValueError):
        BencodeDict({"a": BencodeInt(1), b"a": BencodeInt(2)})


def test_dict_rejects_bad_keys_and_values():
    with pytest.raises(TypeError):
        BencodeDict({1: BencodeInt(1)})
    with pytest.raises(TypeError):
        BencodeDict({b"a": 1})


def test_values_are_immutable():
    value = BencodeInt(1)
    with pytest.raises(AttributeError):
        value._value = 2

    d = BencodeDict({b"a": BencodeInt(1)})
    with pytest.raises(TypeError):
        d.value[b"b"] = BencodeInt(2)

    lst = BencodeList([BencodeInt(1)])
    with pytest.raises(TypeError):
        lst.value[0] = BencodeInt(2)


def test_equality_is_per_variant():
    assert BencodeInt(1) == BencodeInt(1)
    assert BencodeInt(1) != BencodeString(b"1")
    assert BencodeString(b"a") != b"a"
    assert BencodeDict({b"a": BencodeInt(1)}) == BencodeDict([("a", BencodeInt(1))])
    assert hash(BencodeString(b"a")) == hash(BencodeString(b"a"))
    with pytest.raises(TypeError):
        hash(BencodeList([]))


def test_repr():
    assert repr(BencodeInt(42)) == "BencodeInt(42)"
    assert repr(BencodeString(b"spam")) == "BencodeString(b'spam')"
    assert repr(BencodeList([BencodeInt(1)])) == "BencodeList([BencodeInt(1)])"
    assert repr(BencodeDict({b"a": BencodeInt(1)})) == "BencodeDict({b'a': BencodeInt(1)})"


def test_to_bencode():
    value = to_bencode({"name": "spam", "files": [1, b"\x00"]})
    assert value == BencodeDict({
        b"files": BencodeList([BencodeInt(1), BencodeString(b"\x00")]),
        b"name": BencodeString(b"spam"),
    })
    assert to_bencode(value) is value
    with pytest.raises(TypeError):
        to_bencode(False)
    with pytest.raises(TypeError):
        to_bencode(1.0)


def test_to_key_bytes():
    assert to_key_bytes(b"a") == b"a"
    assert to_key_bytes(bytearray(b"a")) == b"a"
    assert to_key_bytes(BencodeString(b"\xff")) == b"\xff"
    assert to_key_bytes("é") == b"\xc3\xa9"
    with pytest.raises(TypeError):
        to_key_bytes(1)
