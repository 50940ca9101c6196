import re
from dataclasses import dataclass, field
from typing import ClassVar, Optional
from .manufacturer_specific import ManufacturerSpecific
from ad_decoder.types.enums import ADType, CompanyId, RecordKind
from ad_decoder.utils.bytes_codec import from_hex, to_hex, to_signed_byte

# 2 (company ID) + 1 (version) + 16 (ucode) + 1 (status) + 1 (power) + 1 (count).
# The three reserved octets that follow are not interpreted.
UCODE_MIN_LENGTH = 22

VERSION_INDEX = 2
UCODE_INDEX = 3
STATUS_INDEX = 19
POWER_INDEX = 20
COUNT_INDEX = 21

LOW_BATTERY_BIT = 0x20
UCODE_PATTERN = re.compile(r'^[0-9A-Fa-f]{32}$')

# Advertising interval (ms) by the low nibble of the status octet; 0xA-0xF -> 10240
INTERVALS_MS = (10, 20, 40, 80, 160, 320, 640, 1280, 2560, 5120)


def _default_ucode_data() -> bytearray:
    # T-Engine Forum company ID, version 3, zeroed ucode/status/power/count/reserved
    return bytearray(b'\x9A\x01\x03' + bytes(22))


@dataclass
class Ucode(ManufacturerSpecific):
    """
    ucode tag advertised under company ID 0x0105 or 0x019A.
    The 128-bit ucode is packed little endian and exposed as 32 upper-case
    hex digits. Constructing an instance from fewer than 22 octets raises
    ValueError.
    """
    length: int = 26
    ad_type: int = ADType.MANUFACTURER_SPECIFIC
    data: bytearray = field(default_factory=_default_ucode_data)
    company_id: Optional[int] = int(CompanyId.T_ENGINE_FORUM)

    kind: ClassVar[RecordKind] = RecordKind.UCODE

    def __post_init__(self) -> None:
        if self.data is None or len(self.data) < UCODE_MIN_LENGTH:
            raise ValueError("The byte sequence cannot be parsed as a ucode.")
        self.data = bytearray(self.data)
        super().__post_init__()

    @classmethod
    def create(cls, length: int, ad_type: int, data: bytes, company_id: int) -> Optional['Ucode']:
        if data is None or len(data) < UCODE_MIN_LENGTH:
            return None
        return cls(length, ad_type, data, company_id)

    @property
    def version(self) -> int:
        return self.data[VERSION_INDEX]

    @version.setter
    def version(self, value: int) -> None:
        if value < 0 or 255 < value:
            raise ValueError(f"'version' is out of the valid range: {value}")
        self.data[VERSION_INDEX] = value

    @property
    def ucode(self) -> str:
        return to_hex(self.data[UCODE_INDEX:UCODE_INDEX + 16][::-1], upper=True)

    @ucode.setter
    def ucode(self, value: str) -> None:
        if value is None:
            raise ValueError("'ucode' is None.")
        if not UCODE_PATTERN.match(value):
            raise ValueError(f"The format of 'ucode' is wrong: {value}")
        self.data[UCODE_INDEX:UCODE_INDEX + 16] = from_hex(value)[::-1]

    @property
    def status(self) -> int:
        return self.data[STATUS_INDEX]

    @status.setter
    def status(self, value: int) -> None:
        self.data[STATUS_INDEX] = value & 0xFF

    @property
    def battery_low(self) -> bool:
        return (self.status & LOW_BATTERY_BIT) != 0

    @property
    def interval(self) -> int:
        nibble = self.status & 0x0F
        return INTERVALS_MS[nibble] if nibble < len(INTERVALS_MS) else 10240

    @property
    def power(self) -> int:
        return to_signed_byte(self.data[POWER_INDEX])

    @power.setter
    def power(self, value: int) -> None:
        if value < -128 or 127 < value:
            raise ValueError(f"'power' is out of the valid range: {value}")
        self.data[POWER_INDEX] = value & 0xFF

    @property
    def count(self) -> int:
        return self.data[COUNT_INDEX]

    @count.setter
    def count(self, value: int) -> None:
        if value < 0 or 0xFF < value:
            raise ValueError(f"'count' is out of the valid range: {value}")
        self.data[COUNT_INDEX] = value

    def __str__(self) -> str:
        return (f"ucode(Version={self.version},Ucode={self.ucode},Status={self.status},"
                f"BatteryLow={self.battery_low},Interval={self.interval},"
                f"Power={self.power},Count={self.count})")
