import uuid
import pytest
from ad_decoder.decoders.decoder_registry import build_default_registry
from ad_decoder.decoders.eddystone_decoder import EddystoneDecoder
from ad_decoder.decoders.payload_parser import ADPayloadParser
from ad_decoder.models.eddystone import EddystoneEID, EddystoneTLM, EddystoneUID, EddystoneURL
from ad_decoder.models.service_data import ServiceData
from ad_decoder.types.enums import FrameType, RecordKind

EDDYSTONE_SERVICE_UUID = uuid.UUID("0000feaa-0000-1000-8000-00805f9b34fb")


class TestEddystone:
    @pytest.fixture
    def parser(self):
        return ADPayloadParser(build_default_registry())

    def test_uid(self, parser):
        payload = bytes([
            23,                                  # Length
            0x16,                                # Service Data - 16-bit UUID
            0xAA, 0xFE,                          # Eddystone UUID
            0x00,                                # Frame type = UID
            0xA6,                                # Tx power -90
            0x12, 0x34, 0x56, 0x78, 0x9A,        # 10-byte namespace
            0xBC, 0xDE, 0xF0, 0x12, 0x34,
            0xFE, 0xDC, 0xBA, 0x98, 0x76, 0x54,  # 6-byte instance
            0x00, 0x00,                          # Reserved
        ])

        structures = parser.parse(payload)

        assert len(structures) == 1
        es = structures[0]
        assert isinstance(es, EddystoneUID)
        assert es.kind == RecordKind.EDDYSTONE_UID
        assert es.ad_type == 0x16
        assert es.service_uuid == EDDYSTONE_SERVICE_UUID
        assert es.frame_type is FrameType.UID
        assert es.tx_power == -90
        assert es.namespace_id == bytes.fromhex("123456789ABCDEF01234")
        assert es.namespace_id_hex == "123456789ABCDEF01234"
        assert es.instance_id == bytes.fromhex("FEDCBA987654")
        assert es.instance_id_hex == "FEDCBA987654"
        assert es.beacon_id_hex == "123456789ABCDEF01234FEDCBA987654"

    def test_uid_short_data(self, parser):
        es = parser.parse(bytes([0x04, 0x16, 0xAA, 0xFE, 0x00]))[0]

        assert isinstance(es, EddystoneUID)
        assert es.tx_power == 0
        assert es.namespace_id is None
        assert es.namespace_id_hex is None

    def test_url(self, parser):
        payload = bytes([14, 0x16, 0xAA, 0xFE, 0x10, 0xCE, 0x00]) + b'example' + bytes([0x00])

        structures = parser.parse(payload)

        assert len(structures) == 1
        es = structures[0]
        assert isinstance(es, EddystoneURL)
        assert es.frame_type is FrameType.URL
        assert es.service_uuid == EDDYSTONE_SERVICE_UUID
        assert es.tx_power == -50
        assert es.url == "http://www.example.com/"

    def test_url_with_path(self, parser):
        payload = bytes([18, 0x16, 0xAA, 0xFE, 0x10, 0xCE, 0x01]) + b'example' + bytes([0x01]) + b'test'
        assert parser.parse(payload)[0].url == "https://www.example.org/test"

    @pytest.mark.parametrize(
        "prefix,body,expected",
        [
            (0x02, b'goo.gl/abc', "http://goo.gl/abc"),
            (0x03, b'example\x0d', "https://example.gov"),
            (0x03, b'exa\x20m\x80ple\x07', "https://example.com"),
            (0x02, b'a\x0e\x1fb\x7f\x0b', "http://ab.info"),
        ]
    )
    def test_url_expansion_and_dropped_bytes(self, parser, prefix, body, expected):
        data = bytes([0xAA, 0xFE, 0x10, 0x00, prefix]) + body
        payload = bytes([len(data) + 1, 0x16]) + data
        assert parser.parse(payload)[0].url == expected

    @pytest.mark.parametrize(
        "data",
        [
            bytes([0xAA, 0xFE, 0x10, 0x00]),                  # No prefix, no body
            bytes([0xAA, 0xFE, 0x10, 0x00, 0x04]) + b'abc',   # Unknown prefix: no scheme
            bytes([0xAA, 0xFE, 0x10, 0x00, 0x09]),            # Unknown prefix, empty body
        ]
    )
    def test_url_malformed_is_none(self, parser, data):
        payload = bytes([len(data) + 1, 0x16]) + data

        es = parser.parse(payload)[0]

        assert isinstance(es, EddystoneURL)
        assert es.url is None

    def test_tlm(self, parser):
        payload = bytes([
            17, 0x16,
            0xAA, 0xFE,
            0x20,                    # Frame type = TLM
            0x00,                    # TLM version
            0x12, 0x34,              # Battery voltage
            0x14, 0x80,              # Temperature 20.5
            0x12, 0x34, 0x56, 0x78,  # Advertisement count
            0x98, 0x76, 0x54, 0x32,  # Elapsed time (0.1 s)
        ])

        es = parser.parse(payload)[0]

        assert isinstance(es, EddystoneTLM)
        assert es.frame_type is FrameType.TLM
        assert es.tlm_version == 0
        assert es.battery_voltage == 0x1234
        assert es.beacon_temperature == pytest.approx(20.5, abs=0.01)
        assert es.advertisement_count == 0x12345678
        assert es.elapsed_time == 0x98765432 * 100

    def test_tlm_short_data_defaults(self, parser):
        es = parser.parse(bytes([0x05, 0x16, 0xAA, 0xFE, 0x20, 0x01]))[0]

        assert es.tlm_version == 1
        assert es.battery_voltage == 0
        assert es.beacon_temperature == -128.0
        assert es.advertisement_count == 0
        assert es.elapsed_time == 0

    def test_eid(self, parser):
        payload = bytes([13, 0x16, 0xAA, 0xFE, 0x30, 0xA6,
                         0x12, 0x34, 0x56, 0x78, 0x9A, 0xBC, 0xDE, 0xF0])

        es = parser.parse(payload)[0]

        assert isinstance(es, EddystoneEID)
        assert es.frame_type is FrameType.EID
        assert es.tx_power == -90
        assert es.eid == bytes.fromhex("123456789ABCDEF0")
        assert es.eid_hex == "123456789ABCDEF0"

    def test_low_nibble_is_ignored(self, parser):
        es = parser.parse(bytes([0x05, 0x16, 0xAA, 0xFE, 0x3F, 0x00]))[0]
        assert isinstance(es, EddystoneEID)

    def test_unknown_frame_falls_back_to_service_data(self, parser):
        structure = parser.parse(bytes([0x04, 0x16, 0xAA, 0xFE, 0x40]))[0]

        assert type(structure) is ServiceData
        assert structure.service_uuid == EDDYSTONE_SERVICE_UUID

    def test_only_16bit_service_data(self, parser):
        structure = parser.parse(bytes([0x06, 0x20, 0xAA, 0xFE, 0x00, 0x00, 0x10]))[0]
        assert type(structure) is ServiceData

    def test_default_frames(self):
        assert EddystoneUID().length == 23
        assert EddystoneURL().url is None
        assert EddystoneTLM().beacon_temperature == -128.0
        assert EddystoneEID().eid == bytes(8)


class TestEddystoneDecoder:
    @pytest.fixture
    def decoder(self):
        return EddystoneDecoder()

    def test_not_eddystone_uuid(self, decoder):
        assert decoder(5, 0x16, bytes([0x0A, 0x18, 0x00, 0x00])) is None

    def test_too_short(self, decoder):
        assert decoder(3, 0x16, bytes([0xAA, 0xFE])) is None

    def test_all_frame_types_mapped(self, decoder):
        for frame_type in FrameType:
            assert frame_type.value in decoder.decoder_map


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
