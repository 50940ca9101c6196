from typing import List, Optional
from ad_decoder.decoders.ad_decoder_base import ADStructureDecoder
from ad_decoder.models.ad_structure import ADStructure
from ad_decoder.models.flags import Flags
from ad_decoder.models.local_name import LocalName
from ad_decoder.models.service_data import ServiceData
from ad_decoder.models.tx_power_level import TxPowerLevel
from ad_decoder.models.uuids import UUIDs
from ad_decoder.types.enums import (
    ADType, SERVICE_DATA_TYPES, UUID_16BIT_TYPES, UUID_32BIT_TYPES, UUID_128BIT_TYPES
)
from ad_decoder.utils.uuid_creator import uuid_from16, uuid_from32, uuid_from128


class FlagsDecoder(ADStructureDecoder):
    """0x01 - Flags"""

    def decode(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        return Flags(length, ad_type, data)


class UUIDsDecoder(ADStructureDecoder):
    """Lists of 16, 32 and 128-bit service class / solicitation UUIDs"""

    def __init__(self):
        super().__init__()
        # Map AD types to (element width, UUID builder)
        self.decoder_map = {}
        for ad_type in UUID_16BIT_TYPES:
            self.decoder_map[ad_type] = (2, uuid_from16)
        for ad_type in UUID_32BIT_TYPES:
            self.decoder_map[ad_type] = (4, uuid_from32)
        for ad_type in UUID_128BIT_TYPES:
            self.decoder_map[ad_type] = (16, uuid_from128)

    def decode(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        entry = self.decoder_map.get(ad_type)
        if entry is None:
            return None

        width, build_uuid = entry
        # Any remainder shorter than one element is ignored
        count = len(data) // width
        uuids: List = [build_uuid(data, i * width) for i in range(count)]

        if len(data) % width:
            self.logger.debug("Ignoring %d trailing bytes of UUID list type 0x%02X", len(data) % width, ad_type)

        return UUIDs(length, ad_type, data, uuids)


class LocalNameDecoder(ADStructureDecoder):
    """0x08 Shortened / 0x09 Complete Local Name"""

    def decode(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        if ad_type not in (ADType.SHORTENED_LOCAL_NAME, ADType.COMPLETE_LOCAL_NAME):
            return None
        return LocalName(length, ad_type, data)


class TxPowerLevelDecoder(ADStructureDecoder):
    """0x0A - Tx Power Level"""

    def decode(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        return TxPowerLevel(length, ad_type, data)


class ServiceDataDecoder(ADStructureDecoder):
    """0x16 / 0x20 / 0x21 - Service Data with a 16, 32 or 128-bit UUID"""

    def decode(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        if ad_type not in SERVICE_DATA_TYPES:
            return None
        return ServiceData(length, ad_type, data)
