import pandas as pd
import numpy as np
from typing import Any, Iterable, Sequence, Tuple
from ad_decoder.models.ad_structure import ADStructure
from ad_decoder.types.enums import RecordKind
from ad_decoder.utils.bytes_codec import to_hex


class ADExporter:
    """
    Flattens decoded AD structures into a single DataFrame, one row per
    structure, with shared columns and variant-specific columns.
    Columns that do not apply to a structure are left empty.
    """

    ALL_COLUMNS = [
        # Common
        'PAYLOAD',  # Payload identifier (capture line or batch index)
        'LENGTH',  # Declared length octet
        'TYPE',  # AD type
        'KIND',  # Decoded variant
        'DATA',  # Raw data (hex)

        # Standard AD types
        'FLAGS',  # Flags octet
        'UUIDS',  # Space separated service UUIDs
        'NAME',  # Local name
        'TX_POWER',  # Tx power level / calibrated power (dBm)
        'SERVICE_UUID',  # Service Data UUID

        # Manufacturer specific
        'COMPANY_ID',  # Company identifier
        'BEACON_UUID',  # iBeacon proximity UUID
        'MAJOR',  # iBeacon major
        'MINOR',  # iBeacon minor
        'UCODE',  # ucode (hex)
        'STATUS',  # ucode status octet
        'COUNT',  # ucode counter

        # Eddystone
        'FRAME',  # Eddystone frame type
        'NAMESPACE_ID',  # UID namespace (hex)
        'INSTANCE_ID',  # UID instance (hex)
        'URL',  # Decoded URL
        'EID',  # Ephemeral identifier (hex)
        'BATTERY_MV',  # TLM battery voltage
        'TEMP_C',  # TLM beacon temperature
        'ADV_COUNT',  # TLM advertisement count
        'ELAPSED_MS',  # TLM time since power-up
    ]

    @staticmethod
    def payloads_to_dataframe(decoded: Iterable[Tuple[Any, Sequence[ADStructure]]]) -> pd.DataFrame:
        """Build the DataFrame from (payload id, structures) pairs."""
        # Build by columns to avoid a list of dicts
        columns = ADExporter.ALL_COLUMNS
        data_cols = {col: [] for col in columns}

        for payload_id, structures in decoded:
            for structure in structures or []:
                row = {col: None for col in columns}
                row['PAYLOAD'] = payload_id
                ADExporter._process_structure(structure, row)

                for col in columns:
                    data_cols[col].append(row[col])

        df = pd.DataFrame(data_cols, columns=columns)
        return ADExporter._downcast_dtypes(df)

    @staticmethod
    def structures_to_dataframe(structures: Sequence[ADStructure], payload_id: Any = 0) -> pd.DataFrame:
        return ADExporter.payloads_to_dataframe([(payload_id, structures)])

    @staticmethod
    def _downcast_dtypes(df: pd.DataFrame) -> pd.DataFrame:
        if df is None or df.empty:
            return df

        int_cols = [
            'LENGTH', 'TYPE', 'FLAGS', 'TX_POWER', 'COMPANY_ID', 'MAJOR', 'MINOR',
            'STATUS', 'COUNT', 'BATTERY_MV', 'ADV_COUNT', 'ELAPSED_MS'
        ]
        for col in int_cols:
            if col in df.columns:
                df[col] = pd.to_numeric(df[col], errors='coerce').astype('Int64')

        if 'TEMP_C' in df.columns:
            df['TEMP_C'] = pd.to_numeric(df['TEMP_C'], errors='coerce').astype(np.float32)

        for col in ('KIND', 'FRAME'):
            if col in df.columns and df[col].notna().any():
                df[col] = df[col].astype('category')

        return df

    @staticmethod
    def _process_structure(structure: ADStructure, row: dict) -> None:
        kind = structure.kind

        row['LENGTH'] = structure.length
        row['TYPE'] = structure.ad_type
        row['KIND'] = kind.value
        row['DATA'] = to_hex(structure.data)

        if kind == RecordKind.FLAGS:
            row['FLAGS'] = structure.data[0] if len(structure.data) >= 1 else None

        elif kind == RecordKind.UUIDS:
            row['UUIDS'] = ' '.join(str(u) for u in structure.uuids)

        elif kind == RecordKind.LOCAL_NAME:
            row['NAME'] = structure.local_name

        elif kind == RecordKind.TX_POWER_LEVEL:
            row['TX_POWER'] = structure.level

        elif kind == RecordKind.SERVICE_DATA:
            row['SERVICE_UUID'] = ADExporter._str_or_none(structure.service_uuid)

        elif kind in (RecordKind.EDDYSTONE_UID, RecordKind.EDDYSTONE_URL,
                      RecordKind.EDDYSTONE_TLM, RecordKind.EDDYSTONE_EID):
            ADExporter._process_eddystone(structure, row)

        elif kind == RecordKind.MANUFACTURER_SPECIFIC:
            row['COMPANY_ID'] = structure.company_id

        elif kind == RecordKind.IBEACON:
            row['COMPANY_ID'] = structure.company_id
            row['BEACON_UUID'] = str(structure.uuid)
            row['MAJOR'] = structure.major
            row['MINOR'] = structure.minor
            row['TX_POWER'] = structure.power

        elif kind == RecordKind.UCODE:
            row['COMPANY_ID'] = structure.company_id
            row['UCODE'] = structure.ucode
            row['STATUS'] = structure.status
            row['TX_POWER'] = structure.power
            row['COUNT'] = structure.count

    @staticmethod
    def _process_eddystone(structure: ADStructure, row: dict) -> None:
        row['SERVICE_UUID'] = ADExporter._str_or_none(structure.service_uuid)
        row['FRAME'] = structure.frame_type.name
        kind = structure.kind

        if kind == RecordKind.EDDYSTONE_UID:
            row['TX_POWER'] = structure.tx_power
            row['NAMESPACE_ID'] = structure.namespace_id_hex
            row['INSTANCE_ID'] = structure.instance_id_hex

        elif kind == RecordKind.EDDYSTONE_URL:
            row['TX_POWER'] = structure.tx_power
            row['URL'] = structure.url

        elif kind == RecordKind.EDDYSTONE_TLM:
            row['BATTERY_MV'] = structure.battery_voltage
            row['TEMP_C'] = structure.beacon_temperature
            row['ADV_COUNT'] = structure.advertisement_count
            row['ELAPSED_MS'] = structure.elapsed_time

        elif kind == RecordKind.EDDYSTONE_EID:
            row['TX_POWER'] = structure.tx_power
            row['EID'] = structure.eid_hex

    @staticmethod
    def _str_or_none(value: Any):
        return str(value) if value is not None else None

    @staticmethod
    def export_to_csv(df: pd.DataFrame, output_path: str, na_rep: str = 'N/A') -> None:
        df.to_csv(output_path, index=False, na_rep=na_rep)
        print(f"Exported {len(df):,} AD structures to {output_path}")

    @staticmethod
    def get_column_info() -> dict:
        return {
            'PAYLOAD': 'Payload identifier (capture line or batch index)',
            'LENGTH': 'Declared AD structure length (type + data octets)',
            'TYPE': 'AD type code',
            'KIND': 'Decoded structure variant',
            'DATA': 'Raw AD data (hex)',
            'FLAGS': 'Flags octet (AD type 0x01)',
            'UUIDS': 'Service class / solicitation UUIDs',
            'NAME': 'Shortened or complete local name',
            'TX_POWER': 'Tx power level or calibrated power (dBm)',
            'SERVICE_UUID': 'Service Data UUID',
            'COMPANY_ID': 'Manufacturer company identifier',
            'BEACON_UUID': 'iBeacon proximity UUID',
            'MAJOR': 'iBeacon major number',
            'MINOR': 'iBeacon minor number',
            'UCODE': 'ucode (128-bit, hex)',
            'STATUS': 'ucode status octet',
            'COUNT': 'ucode counter',
            'FRAME': 'Eddystone frame type (UID/URL/TLM/EID)',
            'NAMESPACE_ID': 'Eddystone-UID namespace (hex)',
            'INSTANCE_ID': 'Eddystone-UID instance (hex)',
            'URL': 'Eddystone-URL decoded URL',
            'EID': 'Eddystone-EID ephemeral identifier (hex)',
            'BATTERY_MV': 'Eddystone-TLM battery voltage (mV)',
            'TEMP_C': 'Eddystone-TLM beacon temperature (Celsius)',
            'ADV_COUNT': 'Eddystone-TLM advertisement count',
            'ELAPSED_MS': 'Eddystone-TLM time since power-up (ms)',
        }
