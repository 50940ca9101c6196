from typing import Callable, List, Optional
from ad_decoder.decoders.ad_decoder_base import ADStructureDecoder, ManufacturerSpecificDecoder
from ad_decoder.models.ad_structure import ADStructure
from ad_decoder.models.ibeacon import IBEACON_FORMAT_ID, IBEACON_MIN_LENGTH, IBeacon
from ad_decoder.models.manufacturer_specific import ManufacturerSpecific
from ad_decoder.models.ucode import Ucode

VendorDecoder = Callable[[int, int, bytes, int], Optional[ManufacturerSpecific]]


class ManufacturerDispatchDecoder(ADStructureDecoder):
    """
    Built-in decoder for AD type 0xFF. Reads the company ID and hands the
    structure to the vendor decoders the registry holds for it.
    """

    def __init__(self, registry):
        super().__init__()
        self.registry = registry

    def decode(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        return self.registry.decode_manufacturer_specific(length, ad_type, data)


class IBeaconDecoder(ManufacturerSpecificDecoder):
    """Apple (0x004C) manufacturer data carrying the iBeacon format ID 0x02 0x15"""

    def decode(self, length: int, ad_type: int, data: bytes, company_id: int) -> Optional[ManufacturerSpecific]:
        if data is None or len(data) < IBEACON_MIN_LENGTH:
            return None

        # Apple uses the same company ID for other formats
        if bytes(data[2:4]) != IBEACON_FORMAT_ID:
            return None

        return IBeacon(length, ad_type, data, company_id)


class UcodeDecoder(ManufacturerSpecificDecoder):
    """ucode tags (0x0105, 0x019A)"""

    def decode(self, length: int, ad_type: int, data: bytes, company_id: int) -> Optional[ManufacturerSpecific]:
        return Ucode.create(length, ad_type, data, company_id)


class CompositeManufacturerDecoder(ManufacturerSpecificDecoder):
    """
    Bundles several vendor decoders behind a single registration.
    Decoders are tried in the order they were added; the first non-None
    result wins, and None is returned when none of them succeeds.
    """

    def __init__(self, *decoders: VendorDecoder):
        super().__init__()
        self.decoders: List[VendorDecoder] = [d for d in decoders if d is not None]

    def add_decoder(self, decoder: Optional[VendorDecoder]) -> None:
        if decoder is None:
            return
        self.decoders.append(decoder)

    def remove_decoder(self, decoder: Optional[VendorDecoder]) -> None:
        if decoder is None or decoder not in self.decoders:
            return
        self.decoders.remove(decoder)

    def decode(self, length: int, ad_type: int, data: bytes, company_id: int) -> Optional[ManufacturerSpecific]:
        for decoder in self.decoders:
            structure = decoder(length, ad_type, data, company_id)
            if structure is not None:
                return structure
        return None
