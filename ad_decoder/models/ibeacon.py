from uuid import UUID
from dataclasses import dataclass, field
from typing import ClassVar, Optional
from .manufacturer_specific import ManufacturerSpecific
from ad_decoder.types.enums import ADType, CompanyId, RecordKind
from ad_decoder.utils.bytes_codec import parse_be2, to_signed_byte
from ad_decoder.utils.uuid_creator import uuid_from128

# 2 (company ID) + 2 (format ID) + 16 (UUID) + 2 (major) + 2 (minor) + 1 (power)
IBEACON_MIN_LENGTH = 25
IBEACON_FORMAT_ID = b'\x02\x15'

UUID_INDEX = 4
MAJOR_INDEX = 20
MINOR_INDEX = 22
POWER_INDEX = 24


def _default_ibeacon_data() -> bytearray:
    return bytearray(b'\x4C\x00' + IBEACON_FORMAT_ID + bytes(21))


@dataclass
class IBeacon(ManufacturerSpecific):
    """
    iBeacon: Apple (0x004C) manufacturer specific data with format ID 0x02 0x15.

    Layout of data:
        [0:2]   company ID (little endian)
        [2:4]   format ID
        [4:20]  proximity UUID (big endian)
        [20:22] major (big endian)
        [22:24] minor (big endian)
        [24]    measured power at 1 m (signed)

    Constructing an instance from fewer than 25 octets raises ValueError.
    Fields are read back from data on every access; setters write into data.
    """
    length: int = 26
    ad_type: int = ADType.MANUFACTURER_SPECIFIC
    data: bytearray = field(default_factory=_default_ibeacon_data)
    company_id: Optional[int] = int(CompanyId.APPLE)

    kind: ClassVar[RecordKind] = RecordKind.IBEACON

    def __post_init__(self) -> None:
        if self.data is None or len(self.data) < IBEACON_MIN_LENGTH:
            raise ValueError("The byte sequence cannot be parsed as an iBeacon.")
        self.data = bytearray(self.data)
        super().__post_init__()

    @classmethod
    def create(cls, length: int, ad_type: int, data: bytes, company_id: int) -> Optional['IBeacon']:
        """Like the constructor, but returns None instead of raising on short data."""
        if data is None or len(data) < IBEACON_MIN_LENGTH:
            return None
        return cls(length, ad_type, data, company_id)

    @property
    def uuid(self) -> UUID:
        return uuid_from128(self.data, UUID_INDEX, little_endian=False)

    @uuid.setter
    def uuid(self, value: UUID) -> None:
        if value is None:
            raise ValueError("'uuid' is None.")
        self.data[UUID_INDEX:UUID_INDEX + 16] = value.bytes

    @property
    def major(self) -> int:
        return parse_be2(self.data, MAJOR_INDEX)

    @major.setter
    def major(self, value: int) -> None:
        if value < 0 or 0xFFFF < value:
            raise ValueError(f"'major' is out of the valid range: {value}")
        self.data[MAJOR_INDEX:MAJOR_INDEX + 2] = value.to_bytes(2, byteorder='big')

    @property
    def minor(self) -> int:
        return parse_be2(self.data, MINOR_INDEX)

    @minor.setter
    def minor(self, value: int) -> None:
        if value < 0 or 0xFFFF < value:
            raise ValueError(f"'minor' is out of the valid range: {value}")
        self.data[MINOR_INDEX:MINOR_INDEX + 2] = value.to_bytes(2, byteorder='big')

    @property
    def power(self) -> int:
        return to_signed_byte(self.data[POWER_INDEX])

    @power.setter
    def power(self, value: int) -> None:
        if value < -128 or 127 < value:
            raise ValueError(f"'power' is out of the valid range: {value}")
        self.data[POWER_INDEX] = value & 0xFF

    def __str__(self) -> str:
        return f"iBeacon(UUID={self.uuid},Major={self.major},Minor={self.minor},Power={self.power})"
