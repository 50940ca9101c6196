import logging
from typing import Iterator, List, Optional, Union
from ad_decoder.decoders.decoder_registry import Decoder, DecoderRegistry, VendorDecoder, build_default_registry
from ad_decoder.models.ad_structure import ADStructure

Payload = Union[bytes, bytearray, memoryview]


class ADPayloadParser:
    """
    Splits an advertising / scan response payload into AD structures.

    Each AD structure on the wire is
        [length (1 octet)] [AD type (1 octet)] [data (length - 1 octets)]
    A zero length octet terminates the payload early, and a trailing
    structure that does not fit in the range is dropped. Neither is an error.
    """

    def __init__(self, registry: Optional[DecoderRegistry] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.registry = registry if registry is not None else build_default_registry()

    def register_decoder(self, ad_type: int, decoder: Optional[Decoder]) -> None:
        self.registry.register_decoder(ad_type, decoder)

    def register_manufacturer_decoder(self, company_id: int, decoder: Optional[VendorDecoder]) -> None:
        self.registry.register_manufacturer_decoder(company_id, decoder)

    def parse(self, payload: Optional[Payload], offset: int = 0, length: Optional[int] = None) -> Optional[List[ADStructure]]:
        """
        Parse payload[offset:offset + length] (to the end when length is None).
        Returns None only when payload is None; a bad range gives an empty list.
        """
        if payload is None:
            return None

        return list(self.iter_structures(payload, offset, length))

    def iter_structures(self, payload: Optional[Payload], offset: int = 0,
                        length: Optional[int] = None) -> Iterator[ADStructure]:
        """Lazily yield the AD structures of the payload in wire order."""
        if payload is None:
            return

        payload_size = len(payload)
        if length is None:
            length = payload_size - offset

        if offset < 0 or length < 0 or payload_size <= offset:
            self.logger.debug("Invalid range: offset=%d, length=%d, payload_size=%d", offset, length, payload_size)
            return

        end = min(offset + length, payload_size)
        position = offset

        while position < end:
            ad_length = payload[position]

            # Early termination of the advertising data
            if ad_length == 0:
                break

            # The remaining octets cannot hold the declared structure
            if end - position - 1 < ad_length:
                self.logger.debug("Truncated AD structure at %d: declared %d, available %d",
                                  position, ad_length, end - position - 1)
                break

            ad_type = payload[position + 1]
            data = bytes(payload[position + 2:position + ad_length + 1])

            yield self.registry.decode(ad_length, ad_type, data)

            # Jump to the length octet of the next structure
            position += 1 + ad_length
