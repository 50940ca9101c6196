import uuid
from dataclasses import dataclass, field
from typing import ClassVar, Optional
from .ad_structure import ADStructure
from ad_decoder.types.enums import ADType, RecordKind
from ad_decoder.utils.uuid_creator import uuid_from16, uuid_from32, uuid_from128


@dataclass
class ServiceData(ADStructure):
    """AD types 0x16, 0x20, 0x21 - Service Data with a 16/32/128-bit service UUID."""
    length: int = 1
    ad_type: int = ADType.SERVICE_DATA_16BIT
    service_uuid: Optional[uuid.UUID] = field(init=False, default=None)

    kind: ClassVar[RecordKind] = RecordKind.SERVICE_DATA

    def __post_init__(self) -> None:
        super().__post_init__()
        self.service_uuid = self._extract_service_uuid()

    def _extract_service_uuid(self) -> Optional[uuid.UUID]:
        if self.ad_type == ADType.SERVICE_DATA_16BIT:
            return uuid_from16(self.data)
        if self.ad_type == ADType.SERVICE_DATA_32BIT:
            return uuid_from32(self.data)
        if self.ad_type == ADType.SERVICE_DATA_128BIT:
            return uuid_from128(self.data)
        return None

    def __str__(self) -> str:
        return f"ServiceData(ServiceUUID={self.service_uuid})"
