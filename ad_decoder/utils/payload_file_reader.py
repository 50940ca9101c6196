import logging
from typing import Iterator
from ad_decoder.models.captured_payload import CapturedPayload
from ad_decoder.utils.bytes_codec import from_hex


class PayloadFileReader:
    """
    Reads a text capture with one hex-encoded advertising payload per line:

        # comment
        020106 0AFF4C000215...
        AA:BB:CC:DD:EE:FF,0201060303AAFE

    An optional device address may precede the payload, separated by ',' or ';'.
    Blank lines and lines starting with '#' are ignored; lines that are not
    valid hex are logged and skipped.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def read_payloads(self) -> Iterator[CapturedPayload]:
        with open(self.file_path, 'r', encoding='utf-8') as file:
            for line_number, line in enumerate(file, start=1):
                text = line.strip()
                if not text or text.startswith('#'):
                    continue

                address = None
                for separator in (',', ';'):
                    if separator in text:
                        address, text = (part.strip() for part in text.split(separator, 1))
                        break

                if text.lower().startswith('0x'):
                    text = text[2:]

                try:
                    raw = from_hex(text)
                except ValueError:
                    self.logger.warning("Skipping line %d of %s: not a hex payload", line_number, self.file_path)
                    continue

                yield CapturedPayload(line_number=line_number, raw=raw, address=address or None)
