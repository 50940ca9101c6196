from dataclasses import dataclass, field
from typing import ClassVar
from .ad_structure import ADStructure
from ad_decoder.types.enums import ADType, RecordKind

LIMITED_DISCOVERABLE_BIT = 0x01
GENERAL_DISCOVERABLE_BIT = 0x02
LEGACY_NOT_SUPPORTED_BIT = 0x04  # "BR/EDR Not Supported", exposed inverted
CONTROLLER_SIMULTANEITY_SUPPORTED_BIT = 0x08
HOST_SIMULTANEITY_SUPPORTED_BIT = 0x10


@dataclass
class Flags(ADStructure):
    """
    AD type 0x01 - Flags.
    The flags are read back from data[0] on every access, so the setters only
    have to touch the byte.
    """
    length: int = 2
    ad_type: int = ADType.FLAGS
    data: bytearray = field(default_factory=lambda: bytearray(1))

    kind: ClassVar[RecordKind] = RecordKind.FLAGS

    def __post_init__(self) -> None:
        super().__post_init__()
        self.data = bytearray(self.data)

    def _get_bit(self, bit: int) -> bool:
        if len(self.data) < 1:
            return False
        return (self.data[0] & bit) != 0

    def _set_bit(self, bit: int, value: bool) -> None:
        if len(self.data) < 1:
            return
        if value:
            self.data[0] |= bit
        else:
            self.data[0] &= ~bit & 0xFF

    @property
    def limited_discoverable(self) -> bool:
        return self._get_bit(LIMITED_DISCOVERABLE_BIT)

    @limited_discoverable.setter
    def limited_discoverable(self, value: bool) -> None:
        self._set_bit(LIMITED_DISCOVERABLE_BIT, value)

    @property
    def general_discoverable(self) -> bool:
        return self._get_bit(GENERAL_DISCOVERABLE_BIT)

    @general_discoverable.setter
    def general_discoverable(self, value: bool) -> None:
        self._set_bit(GENERAL_DISCOVERABLE_BIT, value)

    @property
    def legacy_supported(self) -> bool:
        if len(self.data) < 1:
            return False
        return not self._get_bit(LEGACY_NOT_SUPPORTED_BIT)

    @legacy_supported.setter
    def legacy_supported(self, value: bool) -> None:
        self._set_bit(LEGACY_NOT_SUPPORTED_BIT, not value)

    @property
    def controller_simultaneity_supported(self) -> bool:
        return self._get_bit(CONTROLLER_SIMULTANEITY_SUPPORTED_BIT)

    @controller_simultaneity_supported.setter
    def controller_simultaneity_supported(self, value: bool) -> None:
        self._set_bit(CONTROLLER_SIMULTANEITY_SUPPORTED_BIT, value)

    @property
    def host_simultaneity_supported(self) -> bool:
        return self._get_bit(HOST_SIMULTANEITY_SUPPORTED_BIT)

    @host_simultaneity_supported.setter
    def host_simultaneity_supported(self, value: bool) -> None:
        self._set_bit(HOST_SIMULTANEITY_SUPPORTED_BIT, value)

    def __str__(self) -> str:
        return (
            f"Flags(LimitedDiscoverable={self.limited_discoverable},"
            f"GeneralDiscoverable={self.general_discoverable},"
            f"LegacySupported={self.legacy_supported},"
            f"ControllerSimultaneitySupported={self.controller_simultaneity_supported},"
            f"HostSimultaneitySupported={self.host_simultaneity_supported})"
        )
