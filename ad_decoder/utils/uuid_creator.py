import uuid
from typing import Optional

# Bluetooth Base UUID 00000000-0000-1000-8000-00805F9B34FB without its first 4 bytes
BASE_UUID_SUFFIX = bytes.fromhex("00001000800000805f9b34fb")
BASE_UUID = uuid.UUID(bytes=b'\x00\x00\x00\x00' + BASE_UUID_SUFFIX)


def _fits(data: Optional[bytes], offset: int, width: int) -> bool:
    return data is not None and offset >= 0 and offset + width <= len(data)


def uuid_from16(data: Optional[bytes], offset: int = 0, little_endian: bool = True) -> Optional[uuid.UUID]:
    """Expand a 16-bit UUID read at `offset` against the Bluetooth Base UUID"""
    if not _fits(data, offset, 2):
        return None

    short = bytes(data[offset:offset + 2])
    if little_endian:
        short = short[::-1]

    return uuid.UUID(bytes=b'\x00\x00' + short + BASE_UUID_SUFFIX)


def uuid_from32(data: Optional[bytes], offset: int = 0, little_endian: bool = True) -> Optional[uuid.UUID]:
    """Expand a 32-bit UUID read at `offset` against the Bluetooth Base UUID"""
    if not _fits(data, offset, 4):
        return None

    short = bytes(data[offset:offset + 4])
    if little_endian:
        short = short[::-1]

    return uuid.UUID(bytes=short + BASE_UUID_SUFFIX)


def uuid_from128(data: Optional[bytes], offset: int = 0, little_endian: bool = True) -> Optional[uuid.UUID]:
    """
    Build a UUID from 16 raw bytes. In little endian order the whole
    sequence is reversed (this is not uuid.UUID(bytes_le=...), which only
    swaps the first three fields).
    """
    if not _fits(data, offset, 16):
        return None

    raw = bytes(data[offset:offset + 16])
    if little_endian:
        raw = raw[::-1]

    return uuid.UUID(bytes=raw)
