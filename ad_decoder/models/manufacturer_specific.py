from dataclasses import dataclass
from typing import ClassVar, Optional
from .ad_structure import ADStructure
from ad_decoder.types.enums import ADType, CompanyId, RecordKind
from ad_decoder.utils.bytes_codec import parse_le2


@dataclass
class ManufacturerSpecific(ADStructure):
    """
    AD type 0xFF - Manufacturer Specific Data.
    The first two octets hold the company ID (little endian). When no company
    ID is given it is read from the data, falling back to 0xFFFF (0x0000 is
    assigned to a real company, so it cannot serve as "unknown").
    """
    length: int = 3
    ad_type: int = ADType.MANUFACTURER_SPECIFIC
    data: bytes = b'\xFF\xFF'
    company_id: Optional[int] = None

    kind: ClassVar[RecordKind] = RecordKind.MANUFACTURER_SPECIFIC

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.company_id is None:
            self.company_id = parse_le2(self.data, 0) if len(self.data) >= 2 else int(CompanyId.UNASSIGNED)

    def __str__(self) -> str:
        return (f"ManufacturerSpecific(Length={self.length},Type=0x{self.ad_type:02X},"
                f"CompanyID=0x{self.company_id:04X})")
