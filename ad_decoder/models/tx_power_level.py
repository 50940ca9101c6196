from dataclasses import dataclass
from typing import ClassVar
from .ad_structure import ADStructure
from ad_decoder.types.enums import ADType, RecordKind
from ad_decoder.utils.bytes_codec import to_signed_byte


@dataclass
class TxPowerLevel(ADStructure):
    """AD type 0x0A - Tx Power Level (signed dBm)."""
    length: int = 2
    ad_type: int = ADType.TX_POWER_LEVEL
    data: bytes = b'\x00'

    kind: ClassVar[RecordKind] = RecordKind.TX_POWER_LEVEL

    @property
    def level(self) -> int:
        if len(self.data) == 0:
            return 0
        return to_signed_byte(self.data[0])

    def __str__(self) -> str:
        return f"TxPowerLevel({self.level:+d}dBm)"
