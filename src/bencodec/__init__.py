"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .decoder import BencodeDecoder, decode, decode_all, raw_value
from .encoder import encode
from .errors import BencodeDecodeError, BencodeError, BencodeValueError, DecodeErrorKind
from .options import DecoderOptions, IntegerWidth, KeyOrder
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, to_bencode, to_key_bytes

__all__ = [
    'decode', 'decode_all', 'raw_value', 'encode', 'BencodeDecoder',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict', 'to_bencode', 'to_key_bytes',
    'DecoderOptions', 'IntegerWidth', 'KeyOrder',
    'DecodeErrorKind', 'BencodeError', 'BencodeDecodeError', 'BencodeValueError',
]
