from dataclasses import dataclass
from typing import Optional


@dataclass
class CapturedPayload:
    """One advertising payload read from a capture file."""
    line_number: int  # Line of the capture file the payload came from
    raw: bytes
    address: Optional[str] = None
