import logging
from typing import Callable, Dict, List, Optional
from ad_decoder.decoders.eddystone_decoder import EddystoneDecoder
from ad_decoder.decoders.manufacturer_decoders import IBeaconDecoder, ManufacturerDispatchDecoder, UcodeDecoder
from ad_decoder.decoders.standard_decoders import (
    FlagsDecoder, LocalNameDecoder, ServiceDataDecoder, TxPowerLevelDecoder, UUIDsDecoder
)
from ad_decoder.models.ad_structure import ADStructure
from ad_decoder.models.manufacturer_specific import ManufacturerSpecific
from ad_decoder.types.enums import (
    ADType, CompanyId, SERVICE_DATA_TYPES, UUID_16BIT_TYPES, UUID_32BIT_TYPES, UUID_128BIT_TYPES
)
from ad_decoder.utils.bytes_codec import parse_le2

Decoder = Callable[[int, int, bytes], Optional[ADStructure]]
VendorDecoder = Callable[[int, int, bytes, int], Optional[ManufacturerSpecific]]


class DecoderRegistry:
    """
    Two-level decoder lookup: AD type -> decoders, and for AD type 0xFF,
    company ID -> vendor decoders.

    Each key holds an ordered list. A new decoder is put at the head of its
    list, so the latest registration is tried first and earlier ones stay
    available as fallbacks. When no decoder returns a structure, a generic
    one keeps the raw bytes.

    Registration is expected to happen once at start-up; decoding afterwards
    only reads the lists.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._decoders: Dict[int, List[Decoder]] = {}
        self._manufacturer_decoders: Dict[int, List[VendorDecoder]] = {}

    def register_decoder(self, ad_type: int, decoder: Optional[Decoder]) -> None:
        if ad_type < 0 or 0xFF < ad_type:
            raise ValueError(f"'ad_type' is out of the valid range: {ad_type}")

        if decoder is None:
            return

        self._decoders.setdefault(ad_type, []).insert(0, decoder)

    def register_manufacturer_decoder(self, company_id: int, decoder: Optional[VendorDecoder]) -> None:
        if company_id < 0 or 0xFFFF < company_id:
            raise ValueError(f"'company_id' is out of the valid range: {company_id}")

        if decoder is None:
            return

        self._manufacturer_decoders.setdefault(company_id, []).insert(0, decoder)

    def decoders_for(self, ad_type: int) -> List[Decoder]:
        """Decoders registered for an AD type, in the order they are tried."""
        return list(self._decoders.get(ad_type, []))

    def manufacturer_decoders_for(self, company_id: int) -> List[VendorDecoder]:
        return list(self._manufacturer_decoders.get(company_id, []))

    def decode(self, length: int, ad_type: int, data: bytes) -> ADStructure:
        """Build the AD structure for one (length, type, data) triple. Never returns None."""
        for decoder in self._decoders.get(ad_type, []):
            structure = decoder(length, ad_type, data)
            if structure is not None:
                return structure

        self.logger.debug("No decoder produced a structure for type 0x%02X, keeping raw data", ad_type)
        return ADStructure(length, ad_type, data)

    def decode_manufacturer_specific(self, length: int, ad_type: int, data: bytes) -> Optional[ManufacturerSpecific]:
        """
        Second level dispatch on the company ID held (little endian) in the
        first two octets. Returns None when there is no company ID.
        """
        if data is None or len(data) < 2:
            return None

        company_id = parse_le2(data, 0)

        for decoder in self._manufacturer_decoders.get(company_id, []):
            structure = decoder(length, ad_type, data, company_id)
            if structure is not None:
                return structure

        return ManufacturerSpecific(length, ad_type, data, company_id)


def build_default_registry() -> DecoderRegistry:
    """Create a registry holding the built-in decoders."""
    registry = DecoderRegistry()

    # Vendor decoders for Manufacturer Specific Data
    registry.register_manufacturer_decoder(CompanyId.APPLE, IBeaconDecoder())
    ucode_decoder = UcodeDecoder()
    registry.register_manufacturer_decoder(CompanyId.UBIQUITOUS_COMPUTING_TECHNOLOGY, ucode_decoder)
    registry.register_manufacturer_decoder(CompanyId.T_ENGINE_FORUM, ucode_decoder)

    registry.register_decoder(ADType.FLAGS, FlagsDecoder())

    uuids_decoder = UUIDsDecoder()
    for ad_type in sorted(UUID_16BIT_TYPES | UUID_32BIT_TYPES | UUID_128BIT_TYPES):
        registry.register_decoder(ad_type, uuids_decoder)

    local_name_decoder = LocalNameDecoder()
    registry.register_decoder(ADType.SHORTENED_LOCAL_NAME, local_name_decoder)
    registry.register_decoder(ADType.COMPLETE_LOCAL_NAME, local_name_decoder)

    registry.register_decoder(ADType.TX_POWER_LEVEL, TxPowerLevelDecoder())

    # Eddystone is registered after the generic Service Data decoder so it is tried first
    service_data_decoder = ServiceDataDecoder()
    for ad_type in sorted(SERVICE_DATA_TYPES):
        registry.register_decoder(ad_type, service_data_decoder)
    registry.register_decoder(ADType.SERVICE_DATA_16BIT, EddystoneDecoder())

    registry.register_decoder(ADType.MANUFACTURER_SPECIFIC, ManufacturerDispatchDecoder(registry))

    return registry
