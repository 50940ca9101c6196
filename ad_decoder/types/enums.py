from enum import Enum, IntEnum


class ADType(IntEnum):
    """AD types (Bluetooth Assigned Numbers, Generic Access Profile)"""

    FLAGS = 0x01
    INCOMPLETE_16BIT_UUIDS = 0x02
    COMPLETE_16BIT_UUIDS = 0x03
    INCOMPLETE_32BIT_UUIDS = 0x04
    COMPLETE_32BIT_UUIDS = 0x05
    INCOMPLETE_128BIT_UUIDS = 0x06
    COMPLETE_128BIT_UUIDS = 0x07
    SHORTENED_LOCAL_NAME = 0x08
    COMPLETE_LOCAL_NAME = 0x09
    TX_POWER_LEVEL = 0x0A
    SOLICITATION_16BIT_UUIDS = 0x14
    SOLICITATION_128BIT_UUIDS = 0x15
    SERVICE_DATA_16BIT = 0x16
    SOLICITATION_32BIT_UUIDS = 0x1F
    SERVICE_DATA_32BIT = 0x20
    SERVICE_DATA_128BIT = 0x21
    MANUFACTURER_SPECIFIC = 0xFF


# UUID width (bytes) carried by each list / service data type
UUID_16BIT_TYPES = frozenset({
    ADType.INCOMPLETE_16BIT_UUIDS,
    ADType.COMPLETE_16BIT_UUIDS,
    ADType.SOLICITATION_16BIT_UUIDS,
})
UUID_32BIT_TYPES = frozenset({
    ADType.INCOMPLETE_32BIT_UUIDS,
    ADType.COMPLETE_32BIT_UUIDS,
    ADType.SOLICITATION_32BIT_UUIDS,
})
UUID_128BIT_TYPES = frozenset({
    ADType.INCOMPLETE_128BIT_UUIDS,
    ADType.COMPLETE_128BIT_UUIDS,
    ADType.SOLICITATION_128BIT_UUIDS,
})
SERVICE_DATA_TYPES = frozenset({
    ADType.SERVICE_DATA_16BIT,
    ADType.SERVICE_DATA_32BIT,
    ADType.SERVICE_DATA_128BIT,
})


class CompanyId(IntEnum):
    """Company identifiers with a dedicated manufacturer-specific format"""

    APPLE = 0x004C  # iBeacon
    UBIQUITOUS_COMPUTING_TECHNOLOGY = 0x0105  # ucode
    T_ENGINE_FORUM = 0x019A  # ucode
    UNASSIGNED = 0xFFFF


class FrameType(Enum):
    """Eddystone frame types (high nibble of the first service data byte)"""
    UID = 0x00
    URL = 0x10
    TLM = 0x20
    EID = 0x30


class RecordKind(Enum):
    """Discriminant of the decoded AD structure variant"""
    GENERIC = "generic"
    FLAGS = "flags"
    UUIDS = "uuids"
    LOCAL_NAME = "local_name"
    TX_POWER_LEVEL = "tx_power_level"
    SERVICE_DATA = "service_data"
    EDDYSTONE_UID = "eddystone_uid"
    EDDYSTONE_URL = "eddystone_url"
    EDDYSTONE_TLM = "eddystone_tlm"
    EDDYSTONE_EID = "eddystone_eid"
    MANUFACTURER_SPECIFIC = "manufacturer_specific"
    IBEACON = "ibeacon"
    UCODE = "ucode"
