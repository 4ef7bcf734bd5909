from bencodec.decoder import decode
from bencodec.encoder import encode
from bencodec.structure import BencodeInt, BencodeString, BencodeList, BencodeDict


def test_int():
    print("Testing integer decoding...")
    obj, consumed = decode(b"i42e")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeInt)
    assert obj.value == 42
    assert consumed == 4

    print("Testing integer encoding...")
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"i42e"


def test_string():
    print("Testing string decoding...")
    obj, consumed = decode(b"4:spam")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"
    assert consumed == 6

    print("Testing string encoding...")
    assert encode(obj) == b"4:spam"


def test_list():
    print("Testing list decoding...")
    obj, consumed = decode(b"l4:spami3ee")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeList)
    assert len(obj.value) == 2
    assert consumed == 11


def test_dict():
    print("Testing dictionary decoding & encoding...")
    obj, _ = decode(b"d3:cow3:mooe")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeDict)
    assert obj.value[b"cow"].value == b"moo"
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"d3:cow3:mooe"


def test_torrent_like_document():
    raw = (
        b"d8:announce3:url4:infod5:filesld6:lengthi42e4:path4:spamee"
        b"6:locale2:en6:pieces20:" + b"a" * 20 + b"ee"
    )
    print("Decoding torrent-like document...")
    obj, consumed = decode(raw)
    assert consumed == len(raw)

    info = obj[b"info"]
    files = info[b"files"]
    assert files[0][b"length"] == BencodeInt(42)
    assert files[0][b"path"].text() == "spam"
    assert info[b"pieces"].value == b"a" * 20
    assert obj[b"announce"].text() == "url"
    assert encode(obj) == raw
