"""
Eddystone frames carried in 16-bit Service Data (UUID 0xFEAA).

Common layout of data:
    [0:2]  0xAA 0xFE (service UUID, little endian)
    [2]    frame type in the high nibble
    [3..]  frame specific fields
"""
from dataclasses import dataclass, field
from typing import ClassVar, Optional
from urllib.parse import urlsplit
from .service_data import ServiceData
from ad_decoder.types.enums import ADType, FrameType, RecordKind
from ad_decoder.utils.bytes_codec import (
    copy_of_range, fixed_point_to_float, parse_be2, parse_be4_unsigned, to_hex, to_signed_byte
)

EDDYSTONE_UUID_BYTES = b'\xAA\xFE'

URL_SCHEME_PREFIXES = (
    "http://www.",   # 0
    "https://www.",  # 1
    "http://",       # 2
    "https://",      # 3
)

URL_EXPANSION_CODES = (
    ".com/",   # 0x00
    ".org/",   # 0x01
    ".edu/",   # 0x02
    ".net/",   # 0x03
    ".info/",  # 0x04
    ".biz/",   # 0x05
    ".gov/",   # 0x06
    ".com",    # 0x07
    ".org",    # 0x08
    ".edu",    # 0x09
    ".net",    # 0x0A
    ".info",   # 0x0B
    ".biz",    # 0x0C
    ".gov",    # 0x0D
)


def _extract_tx_power(data: bytes) -> int:
    # data[3] = calibrated Tx power at 0 m (UID, URL and EID frames)
    if len(data) >= 4:
        return to_signed_byte(data[3])
    return 0


@dataclass
class Eddystone(ServiceData):
    """Base of the four Eddystone frame models."""
    length: int = 3
    ad_type: int = ADType.SERVICE_DATA_16BIT
    data: bytes = EDDYSTONE_UUID_BYTES

    frame_type: ClassVar[Optional[FrameType]] = None

    def __str__(self) -> str:
        return f"Eddystone(FrameType={self.frame_type.name if self.frame_type else None})"


@dataclass
class EddystoneUID(Eddystone):
    """
    UID frame:
        [3]     calibrated Tx power
        [4:14]  namespace ID
        [14:20] instance ID
        [20:22] reserved
    """
    length: int = 23
    data: bytes = EDDYSTONE_UUID_BYTES + b'\x00' + bytes(19)
    tx_power: int = field(init=False, default=0)
    namespace_id: Optional[bytes] = field(init=False, default=None)
    instance_id: Optional[bytes] = field(init=False, default=None)
    beacon_id: Optional[bytes] = field(init=False, default=None)

    frame_type: ClassVar[FrameType] = FrameType.UID
    kind: ClassVar[RecordKind] = RecordKind.EDDYSTONE_UID

    def __post_init__(self) -> None:
        super().__post_init__()
        self.tx_power = _extract_tx_power(self.data)
        self.namespace_id = copy_of_range(self.data, 4, 14)
        self.instance_id = copy_of_range(self.data, 14, 20)
        self.beacon_id = copy_of_range(self.data, 4, 20)

    @property
    def namespace_id_hex(self) -> Optional[str]:
        return to_hex(self.namespace_id)

    @property
    def instance_id_hex(self) -> Optional[str]:
        return to_hex(self.instance_id)

    @property
    def beacon_id_hex(self) -> Optional[str]:
        return to_hex(self.beacon_id)

    def __str__(self) -> str:
        return (f"EddystoneUID(TxPower={self.tx_power},NamespaceId={self.namespace_id_hex},"
                f"InstanceId={self.instance_id_hex})")


@dataclass
class EddystoneURL(Eddystone):
    """
    URL frame:
        [3]   calibrated Tx power
        [4]   URL scheme prefix code
        [5..] compressed URL (printable ASCII or expansion codes)
    Bytes that are neither printable nor an expansion code are dropped.
    """
    length: int = 5
    data: bytes = EDDYSTONE_UUID_BYTES + b'\x10\x00'
    tx_power: int = field(init=False, default=0)
    url: Optional[str] = field(init=False, default=None)

    frame_type: ClassVar[FrameType] = FrameType.URL
    kind: ClassVar[RecordKind] = RecordKind.EDDYSTONE_URL

    def __post_init__(self) -> None:
        super().__post_init__()
        self.tx_power = _extract_tx_power(self.data)
        self.url = self._extract_url(self.data)

    @staticmethod
    def _extract_scheme_prefix(data: bytes) -> Optional[str]:
        if len(data) < 5:
            return None
        code = data[4]
        if code < len(URL_SCHEME_PREFIXES):
            return URL_SCHEME_PREFIXES[code]
        return None

    @staticmethod
    def _extract_url(data: bytes) -> Optional[str]:
        parts = []

        prefix = EddystoneURL._extract_scheme_prefix(data)
        if prefix is not None:
            parts.append(prefix)

        for ch in data[5:]:
            if ch < len(URL_EXPANSION_CODES):
                parts.append(URL_EXPANSION_CODES[ch])
            elif 0x20 < ch < 0x7F:
                parts.append(chr(ch))

        text = ''.join(parts)
        if not text:
            return None

        # Only absolute URLs (scheme and host) are accepted
        try:
            parsed = urlsplit(text)
        except ValueError:
            return None
        if not parsed.scheme or not parsed.netloc:
            return None

        return text

    def __str__(self) -> str:
        return f"EddystoneURL(TxPower={self.tx_power},URL={self.url})"


@dataclass
class EddystoneTLM(Eddystone):
    """
    TLM (telemetry) frame, all multi-octet fields big endian:
        [3]     TLM version
        [4:6]   battery voltage (mV)
        [6:8]   beacon temperature (signed 8.8 fixed point, Celsius)
        [8:12]  advertisement count since power-up
        [12:16] time since power-up (0.1 s units, exposed in ms)
    """
    length: int = 17
    data: bytes = EDDYSTONE_UUID_BYTES + b'\x20\x00\x00\x00\x80\x00' + bytes(8)
    tlm_version: int = field(init=False, default=0)
    battery_voltage: int = field(init=False, default=0)
    beacon_temperature: float = field(init=False, default=-128.0)
    advertisement_count: int = field(init=False, default=0)
    elapsed_time: int = field(init=False, default=0)

    frame_type: ClassVar[FrameType] = FrameType.TLM
    kind: ClassVar[RecordKind] = RecordKind.EDDYSTONE_TLM

    def __post_init__(self) -> None:
        super().__post_init__()
        data = self.data
        self.tlm_version = data[3] if len(data) >= 4 else 0
        self.battery_voltage = parse_be2(data, 4) if len(data) >= 6 else 0
        self.beacon_temperature = fixed_point_to_float(data, 6) if len(data) >= 8 else -128.0
        self.advertisement_count = parse_be4_unsigned(data, 8) if len(data) >= 12 else 0
        # 0.1 s resolution to ms
        self.elapsed_time = parse_be4_unsigned(data, 12) * 100 if len(data) >= 16 else 0

    def __str__(self) -> str:
        return (f"EddystoneTLM(Version={self.tlm_version},BatteryVoltage={self.battery_voltage},"
                f"BeaconTemperature={self.beacon_temperature:f},"
                f"AdvertisementCount={self.advertisement_count},ElapsedTime={self.elapsed_time})")


@dataclass
class EddystoneEID(Eddystone):
    """
    EID (ephemeral identifier) frame:
        [3]    calibrated Tx power
        [4:12] 8-byte ephemeral identifier
    """
    length: int = 13
    data: bytes = EDDYSTONE_UUID_BYTES + b'\x30\x00' + bytes(8)
    tx_power: int = field(init=False, default=0)
    eid: Optional[bytes] = field(init=False, default=None)

    frame_type: ClassVar[FrameType] = FrameType.EID
    kind: ClassVar[RecordKind] = RecordKind.EDDYSTONE_EID

    def __post_init__(self) -> None:
        super().__post_init__()
        self.tx_power = _extract_tx_power(self.data)
        self.eid = copy_of_range(self.data, 4, 12)

    @property
    def eid_hex(self) -> Optional[str]:
        return to_hex(self.eid)

    def __str__(self) -> str:
        return f"EddystoneEID(TxPower={self.tx_power},EID={self.eid_hex})"
