import uuid
import pytest
from ad_decoder.decoders.decoder_registry import DecoderRegistry, build_default_registry
from ad_decoder.decoders.manufacturer_decoders import (
    CompositeManufacturerDecoder, IBeaconDecoder, ManufacturerDispatchDecoder, UcodeDecoder
)
from ad_decoder.decoders.payload_parser import ADPayloadParser
from ad_decoder.models.ad_structure import ADStructure
from ad_decoder.models.ibeacon import IBeacon
from ad_decoder.models.manufacturer_specific import ManufacturerSpecific
from ad_decoder.models.ucode import Ucode
from ad_decoder.types.enums import ADType, CompanyId, RecordKind

IBEACON_UUID = uuid.UUID("e2c56db5-dffb-48d2-b060-d0f5a71096e0")

IBEACON_PAYLOAD = bytes([
    0x1A, 0xFF,                          # Length, Manufacturer Specific Data
    0x4C, 0x00,                          # Apple
    0x02, 0x15,                          # iBeacon format ID
    0xE2, 0xC5, 0x6D, 0xB5, 0xDF, 0xFB,  # Proximity UUID
    0x48, 0xD2, 0xB0, 0x60, 0xD0, 0xF5,
    0xA7, 0x10, 0x96, 0xE0,
    0x00, 0x01,                          # Major
    0x00, 0x02,                          # Minor
    0xC5,                                # Power -59
])

UCODE_PAYLOAD = bytes([
    0x1A, 0xFF,
    0x9A, 0x01,                          # T-Engine Forum
    0x03,                                # Version
    0x00, 0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07,
    0x08, 0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x0E, 0x0F,
    0x25,                                # Status: battery low, interval 320 ms
    0xF6,                                # Power -10
    0x07,                                # Count
    0x00, 0x00, 0x00,                    # Reserved
])


@pytest.fixture
def parser():
    return ADPayloadParser(build_default_registry())


class TestManufacturerSpecific:

    def test_unknown_company(self, parser):
        structure = parser.parse(bytes([0x04, 0xFF, 0x34, 0x12, 0x56]))[0]

        assert type(structure) is ManufacturerSpecific
        assert structure.kind == RecordKind.MANUFACTURER_SPECIFIC
        assert structure.company_id == 0x1234
        assert structure.data == b'\x34\x12\x56'
        assert str(structure) == "ManufacturerSpecific(Length=4,Type=0xFF,CompanyID=0x1234)"

    @pytest.mark.parametrize("payload", [bytes([0x01, 0xFF]), bytes([0x02, 0xFF, 0x4C])])
    def test_no_company_id_gives_generic_structure(self, parser, payload):
        structure = parser.parse(payload)[0]

        assert type(structure) is ADStructure
        assert structure.ad_type == ADType.MANUFACTURER_SPECIFIC

    def test_company_id_from_data(self):
        assert ManufacturerSpecific(3, 0xFF, b'\x05\x01').company_id == 0x0105
        assert ManufacturerSpecific(2, 0xFF, b'\x05').company_id == CompanyId.UNASSIGNED
        assert ManufacturerSpecific().company_id == 0xFFFF

    def test_explicit_company_id_kept(self):
        assert ManufacturerSpecific(3, 0xFF, b'\x4C\x00', 0x1234).company_id == 0x1234


class TestIBeacon:

    def test_decode(self, parser):
        structures = parser.parse(IBEACON_PAYLOAD)

        assert len(structures) == 1
        ib = structures[0]
        assert isinstance(ib, IBeacon)
        assert ib.kind == RecordKind.IBEACON
        assert ib.length == 26
        assert ib.company_id == CompanyId.APPLE
        assert ib.uuid == IBEACON_UUID
        assert ib.major == 1
        assert ib.minor == 2
        assert ib.power == -59

    def test_str(self, parser):
        ib = parser.parse(IBEACON_PAYLOAD)[0]
        assert str(ib) == f"iBeacon(UUID={IBEACON_UUID},Major=1,Minor=2,Power=-59)"

    def test_other_apple_format_is_plain_manufacturer_data(self, parser):
        payload = bytearray(IBEACON_PAYLOAD)
        payload[4] = 0x10

        structure = parser.parse(bytes(payload))[0]

        assert type(structure) is ManufacturerSpecific
        assert structure.company_id == CompanyId.APPLE

    def test_short_apple_data_is_plain_manufacturer_data(self, parser):
        structure = parser.parse(bytes([0x05, 0xFF, 0x4C, 0x00, 0x02, 0x15]))[0]

        assert type(structure) is ManufacturerSpecific
        assert structure.company_id == CompanyId.APPLE

    def test_setters_write_into_data(self, parser):
        ib = parser.parse(IBEACON_PAYLOAD)[0]
        new_uuid = uuid.UUID("00112233-4455-6677-8899-aabbccddeeff")

        ib.uuid = new_uuid
        ib.major = 0xABCD
        ib.minor = 0
        ib.power = -128

        assert ib.uuid == new_uuid
        assert ib.data[4:20] == new_uuid.bytes
        assert ib.major == 0xABCD
        assert ib.data[20:22] == b'\xAB\xCD'
        assert ib.minor == 0
        assert ib.power == -128
        assert ib.data[24] == 0x80

    @pytest.mark.parametrize(
        "attr,value",
        [
            ("major", -1),
            ("major", 0x10000),
            ("minor", 0x10000),
            ("power", 128),
            ("power", -129),
            ("uuid", None),
        ]
    )
    def test_setters_reject_out_of_range(self, attr, value):
        ib = IBeacon()
        with pytest.raises(ValueError):
            setattr(ib, attr, value)

    def test_construct_from_short_data_raises(self):
        with pytest.raises(ValueError):
            IBeacon(25, 0xFF, bytes(24), CompanyId.APPLE)

    def test_create_returns_none_on_short_data(self):
        assert IBeacon.create(25, 0xFF, bytes(24), CompanyId.APPLE) is None
        assert IBeacon.create(26, 0xFF, IBEACON_PAYLOAD[2:], CompanyId.APPLE).major == 1

    def test_default(self):
        ib = IBeacon()

        assert ib.company_id == 0x004C
        assert ib.data[:4] == b'\x4C\x00\x02\x15'
        assert ib.uuid == uuid.UUID(int=0)
        assert (ib.major, ib.minor, ib.power) == (0, 0, 0)


class TestUcode:

    def test_decode(self, parser):
        uc = parser.parse(UCODE_PAYLOAD)[0]

        assert isinstance(uc, Ucode)
        assert uc.kind == RecordKind.UCODE
        assert uc.company_id == CompanyId.T_ENGINE_FORUM
        assert uc.version == 3
        assert uc.ucode == "0F0E0D0C0B0A09080706050403020100"
        assert uc.status == 0x25
        assert uc.battery_low is True
        assert uc.interval == 320
        assert uc.power == -10
        assert uc.count == 7

    def test_other_company_id(self, parser):
        payload = bytearray(UCODE_PAYLOAD)
        payload[2:4] = b'\x05\x01'

        uc = parser.parse(bytes(payload))[0]

        assert isinstance(uc, Ucode)
        assert uc.company_id == CompanyId.UBIQUITOUS_COMPUTING_TECHNOLOGY

    def test_short_data_is_plain_manufacturer_data(self, parser):
        structure = parser.parse(bytes([0x06, 0xFF, 0x9A, 0x01, 0x03, 0x00, 0x00]))[0]

        assert type(structure) is ManufacturerSpecific
        assert structure.company_id == CompanyId.T_ENGINE_FORUM

    @pytest.mark.parametrize(
        "status,interval,battery_low",
        [
            (0x00, 10, False),
            (0x09, 5120, False),
            (0x0A, 10240, False),
            (0x2F, 10240, True),
            (0xD1, 20, False),
        ]
    )
    def test_status_bits(self, status, interval, battery_low):
        uc = Ucode()
        uc.status = status

        assert uc.interval == interval
        assert uc.battery_low is battery_low

    def test_setters(self):
        uc = Ucode()

        uc.ucode = "00112233445566778899aabbccddeeff"
        uc.version = 255
        uc.power = -1
        uc.count = 200

        assert uc.ucode == "00112233445566778899AABBCCDDEEFF"
        assert uc.data[3] == 0xFF
        assert uc.data[18] == 0x00
        assert uc.version == 255
        assert uc.power == -1
        assert uc.count == 200

    @pytest.mark.parametrize(
        "attr,value",
        [
            ("ucode", None),
            ("ucode", "0011"),
            ("ucode", "X0112233445566778899AABBCCDDEEFF"),
            ("version", 256),
            ("power", 200),
            ("count", -1),
        ]
    )
    def test_setters_reject_bad_values(self, attr, value):
        uc = Ucode()
        with pytest.raises(ValueError):
            setattr(uc, attr, value)

    def test_construct_from_short_data_raises(self):
        with pytest.raises(ValueError):
            Ucode(22, 0xFF, bytes(21), CompanyId.T_ENGINE_FORUM)
        assert Ucode.create(22, 0xFF, bytes(21), CompanyId.T_ENGINE_FORUM) is None


class TestCompositeManufacturerDecoder:

    def test_first_success_wins(self):
        calls = []

        def never(length, ad_type, data, company_id):
            calls.append("never")
            return None

        def always(length, ad_type, data, company_id):
            calls.append("always")
            return ManufacturerSpecific(length, ad_type, data, company_id)

        composite = CompositeManufacturerDecoder(never, always, IBeaconDecoder())

        structure = composite(26, 0xFF, IBEACON_PAYLOAD[2:], CompanyId.APPLE)

        assert type(structure) is ManufacturerSpecific
        assert calls == ["never", "always"]

    def test_add_and_remove(self):
        ibeacon_decoder = IBeaconDecoder()
        composite = CompositeManufacturerDecoder()
        assert composite(26, 0xFF, IBEACON_PAYLOAD[2:], CompanyId.APPLE) is None

        composite.add_decoder(ibeacon_decoder)
        composite.add_decoder(None)
        assert isinstance(composite(26, 0xFF, IBEACON_PAYLOAD[2:], CompanyId.APPLE), IBeacon)

        composite.remove_decoder(ibeacon_decoder)
        composite.remove_decoder(ibeacon_decoder)
        assert composite.decoders == []

    def test_registered_in_registry(self):
        registry = DecoderRegistry()
        registry.register_decoder(ADType.MANUFACTURER_SPECIFIC, ManufacturerDispatchDecoder(registry))
        registry.register_manufacturer_decoder(
            CompanyId.T_ENGINE_FORUM, CompositeManufacturerDecoder(IBeaconDecoder(), UcodeDecoder())
        )

        structure = ADPayloadParser(registry).parse(UCODE_PAYLOAD)[0]

        assert isinstance(structure, Ucode)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
