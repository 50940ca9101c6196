from typing import Optional
from ad_decoder.decoders.ad_decoder_base import ADStructureDecoder
from ad_decoder.models.ad_structure import ADStructure
from ad_decoder.models.eddystone import (
    EDDYSTONE_UUID_BYTES, EddystoneEID, EddystoneTLM, EddystoneUID, EddystoneURL
)
from ad_decoder.types.enums import FrameType


class EddystoneDecoder(ADStructureDecoder):
    """
    Service Data (0x16) whose 16-bit UUID is 0xFEAA. The frame type is the
    high-order nibble of data[2]; the low nibble is reserved.

        Frame | High nibble
        ------|------------
        UID   | 0x00
        URL   | 0x10
        TLM   | 0x20
        EID   | 0x30

    Any other nibble returns None so that the generic Service Data decoder
    registered for the same type takes over.
    """

    def __init__(self):
        super().__init__()
        self.decoder_map = {
            FrameType.UID.value: EddystoneUID,
            FrameType.URL.value: EddystoneURL,
            FrameType.TLM.value: EddystoneTLM,
            FrameType.EID.value: EddystoneEID,
        }

    def decode(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        if data is None or len(data) < 3:
            return None

        if bytes(data[0:2]) != EDDYSTONE_UUID_BYTES:
            return None

        frame_type = data[2] & 0xF0
        frame_class = self.decoder_map.get(frame_type)
        if frame_class is None:
            self.logger.debug("Unknown Eddystone frame type 0x%02X", frame_type)
            return None

        return frame_class(length, ad_type, data)
