from dataclasses import dataclass
from typing import ClassVar
from ad_decoder.types.enums import RecordKind


@dataclass
class ADStructure:
    """Unified AD structure model: one length-prefixed record of an advertising payload."""
    length: int = 0  # Octets declared on the wire (type byte + data)
    ad_type: int = 0
    data: bytes = b''

    kind: ClassVar[RecordKind] = RecordKind.GENERIC

    def __post_init__(self) -> None:
        if self.data is None:
            self.data = b''

    def __str__(self) -> str:
        return f"ADStructure(Length={self.length},Type=0x{self.ad_type:02X})"
