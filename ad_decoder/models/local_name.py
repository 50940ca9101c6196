from dataclasses import dataclass, field
from typing import ClassVar, Optional
from .ad_structure import ADStructure
from ad_decoder.types.enums import ADType, RecordKind


@dataclass
class LocalName(ADStructure):
    """AD types 0x08 (Shortened Local Name) and 0x09 (Complete Local Name)."""
    length: int = 1
    ad_type: int = ADType.COMPLETE_LOCAL_NAME
    local_name: Optional[str] = field(init=False, default=None)

    kind: ClassVar[RecordKind] = RecordKind.LOCAL_NAME

    def __post_init__(self) -> None:
        super().__post_init__()
        if len(self.data) >= 1:
            self.local_name = bytes(self.data).decode('utf-8', errors='replace')

    @property
    def is_shortened(self) -> bool:
        return self.ad_type == ADType.SHORTENED_LOCAL_NAME

    @property
    def is_complete(self) -> bool:
        return self.ad_type == ADType.COMPLETE_LOCAL_NAME

    def __str__(self) -> str:
        flavor = "SHORTENED" if self.is_shortened else "COMPLETE"
        return f"LocalName({flavor},{self.local_name})"
