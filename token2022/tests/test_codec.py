import struct

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token2022.codec import IncrementalReader, Writer, encoded_string_size
from token2022.errors import (
    BufferTooShortError,
    InvalidAccountDataError,
    InvalidOptionDiscriminantError,
    TokenError,
)
from token2022.pod import AeCiphertext, ElGamalCiphertext, ElGamalPubkey

KEY = Pubkey.from_string("FdrdFuo1RQ9LrQ3FRfQUE7RigyANe5kFNLyMhCYk1xgJ")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _pack_u32(v: int) -> bytes:
    return struct.pack("<I", v)


def _pack_string(s: str) -> bytes:
    encoded = s.encode("utf-8")
    return _pack_u32(len(encoded)) + encoded


# ===========================================================================
# Reader
# ===========================================================================

class TestReadScalars:
    def test_read_u8(self):
        r = IncrementalReader(bytes([42]))
        assert r.read_u8() == 42
        assert r.offset == 1
        assert r.remaining == 0

    def test_read_bool_nonzero_is_true(self):
        r = IncrementalReader(bytes([0, 7]))
        assert r.read_bool() is False
        assert r.read_bool() is True

    def test_read_signed(self):
        r = IncrementalReader(struct.pack("<hq", -500, -1715002448))
        assert r.read_i16() == -500
        assert r.read_i64() == -1715002448
        assert r.remaining == 0

    def test_read_u64_max(self):
        r = IncrementalReader(b"\xff" * 8)
        assert r.read_u64() == 2**64 - 1

    def test_read_f64(self):
        r = IncrementalReader(struct.pack("<d", 1.5))
        assert r.read_f64() == 1.5

    def test_little_endian(self):
        r = IncrementalReader(bytes([0x34, 0x12]))
        assert r.read_u16() == 0x1234


class TestReadKeysAndStrings:
    def test_read_pubkey(self):
        r = IncrementalReader(bytes(KEY))
        assert r.read_pubkey() == KEY
        assert r.offset == 32

    def test_read_zeroable_pubkey_zero_is_none(self):
        r = IncrementalReader(b"\x00" * 32 + bytes(KEY))
        assert r.read_zeroable_pubkey() is None
        assert r.read_zeroable_pubkey() == KEY

    def test_read_string(self):
        r = IncrementalReader(_pack_string("MegaToken") + _pack_string(""))
        assert r.read_string() == "MegaToken"
        assert r.read_string() == ""
        assert r.remaining == 0

    def test_read_string_utf8(self):
        r = IncrementalReader(_pack_string("café"))
        assert r.read_string() == "café"

    def test_read_string_truncated(self):
        with pytest.raises(BufferTooShortError):
            IncrementalReader(_pack_u32(10) + b"abc").read_string()

    def test_read_string_invalid_utf8(self):
        r = IncrementalReader(_pack_u32(2) + b"\xff\xfe")
        with pytest.raises(InvalidAccountDataError) as exc_info:
            r.read_string()
        assert isinstance(exc_info.value, TokenError)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


class TestReadOptions:
    def test_option_none(self):
        r = IncrementalReader(bytes([0]))
        assert r.read_option_u64() is None
        assert r.offset == 1

    def test_option_some(self):
        r = IncrementalReader(bytes([1, 5, 0, 0, 0, 0, 0, 0, 0]))
        assert r.read_option_u64() == 5
        assert r.remaining == 0

    def test_option_bad_tag(self):
        with pytest.raises(InvalidOptionDiscriminantError):
            IncrementalReader(bytes([2]) + b"\x00" * 8).read_option_u64()

    def test_option_pubkey(self):
        r = IncrementalReader(bytes([1]) + bytes(KEY) + bytes([0]))
        assert r.read_option_pubkey() == KEY
        assert r.read_option_pubkey() is None

    def test_coption_none_still_consumes_value(self):
        r = IncrementalReader(b"\x00" * 36)
        assert r.read_coption_pubkey() is None
        assert r.offset == 36

    def test_coption_some(self):
        r = IncrementalReader(_pack_u32(1) + struct.pack("<Q", 2039280))
        assert r.read_coption_u64() == 2039280

    def test_coption_bad_tag(self):
        with pytest.raises(InvalidOptionDiscriminantError):
            IncrementalReader(_pack_u32(7) + b"\x00" * 32).read_coption_pubkey()


class TestReadErrors:
    def test_empty_buffer(self):
        with pytest.raises(BufferTooShortError):
            IncrementalReader(b"").read_u8()

    def test_short_u64(self):
        with pytest.raises(BufferTooShortError):
            IncrementalReader(b"\x00" * 7).read_u64()

    def test_short_pubkey(self):
        with pytest.raises(BufferTooShortError):
            IncrementalReader(b"\x00" * 31).read_pubkey()

    def test_failed_read_does_not_advance(self):
        r = IncrementalReader(b"\x01\x02")
        with pytest.raises(BufferTooShortError):
            r.read_u32()
        assert r.offset == 0


# ===========================================================================
# Writer
# ===========================================================================

class TestWriter:
    def test_option_u64_none(self):
        w = Writer()
        w.write_option_u64(None)
        assert w.to_bytes() == b"\x00"

    def test_option_u64_some(self):
        w = Writer()
        w.write_option_u64(5)
        assert w.to_bytes() == bytes([1, 5, 0, 0, 0, 0, 0, 0, 0])

    def test_coption_pubkey_none(self):
        w = Writer()
        w.write_coption_pubkey(None)
        assert w.to_bytes() == b"\x00" * 36

    def test_coption_pubkey_some(self):
        w = Writer()
        w.write_coption_pubkey(KEY)
        assert w.to_bytes() == _pack_u32(1) + bytes(KEY)

    def test_scalars(self):
        w = Writer()
        w.write_u8(1)
        w.write_bool(True)
        w.write_u16(0x1234)
        w.write_i16(-1)
        w.write_u32(7)
        w.write_u64(2**64 - 1)
        w.write_i64(-2)
        w.write_f64(0.5)
        assert w.to_bytes() == struct.pack("<BBHhIQqd", 1, 1, 0x1234, -1, 7, 2**64 - 1, -2, 0.5)
        assert len(w) == 1 + 1 + 2 + 2 + 4 + 8 + 8 + 8

    def test_string(self):
        w = Writer()
        w.write_string("MT")
        assert w.to_bytes() == _pack_string("MT")
        assert encoded_string_size("MT") == 6

    def test_zeroable_pubkey_none(self):
        w = Writer()
        w.write_zeroable_pubkey(None)
        assert w.to_bytes() == b"\x00" * 32

    def test_out_of_range(self):
        with pytest.raises(InvalidAccountDataError):
            Writer().write_u8(256)
        with pytest.raises(InvalidAccountDataError):
            Writer().write_u64(-1)

    def test_write_bytes_size_mismatch(self):
        with pytest.raises(InvalidAccountDataError):
            Writer().write_bytes(b"\x00" * 3, 4)

    def test_writer_output_reads_back(self):
        w = Writer()
        w.write_coption_u64(None)
        w.write_pubkey(KEY)
        w.write_string("Token")
        r = IncrementalReader(w.to_bytes())
        assert r.read_coption_u64() is None
        assert r.read_pubkey() == KEY
        assert r.read_string() == "Token"
        assert r.remaining == 0


# ===========================================================================
# Opaque blobs
# ===========================================================================

class TestPod:
    def test_widths(self):
        assert len(ElGamalPubkey.zeroed()) == 32
        assert len(ElGamalCiphertext.zeroed()) == 64
        assert len(AeCiphertext.zeroed()) == 36

    def test_rejects_wrong_width(self):
        with pytest.raises(InvalidAccountDataError):
            ElGamalCiphertext(b"\x00" * 63)

    def test_is_zero(self):
        assert ElGamalPubkey.zeroed().is_zero()
        assert not ElGamalPubkey(b"\x01" + b"\x00" * 31).is_zero()

    def test_bytes_equality(self):
        raw = bytes(range(36))
        assert AeCiphertext(raw) == raw
