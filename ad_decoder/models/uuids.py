import uuid
from dataclasses import dataclass, field
from typing import ClassVar, List
from .ad_structure import ADStructure
from ad_decoder.types.enums import RecordKind


@dataclass
class UUIDs(ADStructure):
    """AD types 0x02-0x07, 0x14, 0x15, 0x1F - lists of service class / solicitation UUIDs."""
    uuids: List[uuid.UUID] = field(default_factory=list)

    kind: ClassVar[RecordKind] = RecordKind.UUIDS

    def __str__(self) -> str:
        return f"UUIDs({','.join(str(u) for u in self.uuids)})"
