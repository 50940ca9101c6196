"""
Byte level helpers shared by the AD structure models.
All functions are pure; none of them keeps state between calls.
"""
from typing import Optional


def parse_uint(data: bytes, offset: int, width: int, big_endian: bool = True) -> int:
    """
    Read an unsigned integer of `width` octets (2 or 4) starting at `offset`.
    Reading past the end of `data` is a caller error and raises IndexError.
    """
    if width not in (2, 4):
        raise ValueError(f"'width' must be 2 or 4: {width}")
    if offset < 0 or offset + width > len(data):
        raise IndexError(f"Cannot read {width} bytes at offset {offset} from {len(data)} bytes")

    return int.from_bytes(data[offset:offset + width], byteorder='big' if big_endian else 'little')


def parse_be2(data: bytes, offset: int) -> int:
    return parse_uint(data, offset, 2, big_endian=True)


def parse_be4_unsigned(data: bytes, offset: int) -> int:
    return parse_uint(data, offset, 4, big_endian=True)


def parse_le2(data: bytes, offset: int) -> int:
    return parse_uint(data, offset, 2, big_endian=False)


def to_signed_byte(value: int) -> int:
    """Interpret an octet (0..255) as a two's complement value (-128..127)"""
    value &= 0xFF
    return value - 0x100 if value & 0x80 else value


def fixed_point_to_float(data: bytes, offset: int) -> float:
    """
    Signed 8.8 fixed point: the first octet is the signed integer part,
    the second octet the unsigned fraction in 1/256 units.
    """
    return to_signed_byte(data[offset]) + (data[offset + 1] & 0xFF) / 256.0


def to_hex(data: Optional[bytes], upper: bool = True) -> Optional[str]:
    if data is None:
        return None

    text = bytes(data).hex()
    return text.upper() if upper else text


def from_hex(text: str) -> bytes:
    """Parse a hex dump, ignoring whitespace. Raises ValueError on bad input."""
    return bytes.fromhex(''.join(text.split()))


def copy_of_range(source: Optional[bytes], start: int, end: int) -> Optional[bytes]:
    """Copy source[start:end], or None when the range does not fit. Never raises."""
    if source is None or start < 0 or end < 0:
        return None

    if end < start or len(source) < end:
        return None

    return bytes(source[start:end])
