from ad_decoder.decoders.decoder_registry import build_default_registry
from ad_decoder.decoders.payload_parser import ADPayloadParser
from ad_decoder.models.ad_structure import ADStructure
from typing import List, Iterable, Iterator, Optional

_parser = ADPayloadParser(build_default_registry())


def parse_payload(payload: Optional[bytes], offset: int = 0, length: Optional[int] = None) -> Optional[List[ADStructure]]:
    """Parse one payload with the module-level parser holding the built-in decoders."""
    return _parser.parse(payload, offset, length)


def parse_payloads(payloads: Iterable[bytes]) -> List[List[ADStructure]]:
    """
    Parse a batch of payloads, one list of AD structures per payload.

    Uses a module-level parser to avoid rebuilding the registry on every call.
    """
    return [_parser.parse(payload) for payload in payloads]


def parse_payloads_iter(payloads: Iterable[bytes]) -> Iterator[List[ADStructure]]:
    """
    Parse payloads lazily and yield their structures one payload at a time.
    This avoids materializing the whole capture before exporting.
    """
    for payload in payloads:
        yield _parser.parse(payload)
