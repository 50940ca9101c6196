import pandas as pd
from typing import Iterable, Union
from ad_decoder.types.enums import RecordKind


class ADFilter:
    """
    Filters over the DataFrame produced by ADExporter.
    Filters gracefully handle missing columns by returning the input unchanged.
    """

    BEACON_KINDS = (
        RecordKind.IBEACON,
        RecordKind.UCODE,
        RecordKind.EDDYSTONE_UID,
        RecordKind.EDDYSTONE_URL,
        RecordKind.EDDYSTONE_TLM,
        RecordKind.EDDYSTONE_EID,
    )

    @staticmethod
    def filter_by_type(df: pd.DataFrame, ad_types: Union[int, Iterable[int]]) -> pd.DataFrame:
        """Keep the rows of the given AD type(s)"""
        if 'TYPE' not in df.columns:
            return df

        if isinstance(ad_types, int):
            ad_types = [ad_types]
        mask = df['TYPE'].isin([int(t) for t in ad_types])
        return df[mask].reset_index(drop=True)

    @staticmethod
    def filter_by_kind(df: pd.DataFrame, kinds: Union[RecordKind, Iterable[RecordKind]]) -> pd.DataFrame:
        """Keep the rows decoded as the given variant(s)"""
        if 'KIND' not in df.columns:
            return df

        if isinstance(kinds, RecordKind):
            kinds = [kinds]
        mask = df['KIND'].astype(str).isin([k.value for k in kinds])
        return df[mask].reset_index(drop=True)

    @staticmethod
    def filter_by_company(df: pd.DataFrame, company_id: int) -> pd.DataFrame:
        """Keep manufacturer specific rows of one company"""
        if 'COMPANY_ID' not in df.columns:
            return df

        mask = (df['COMPANY_ID'] == int(company_id)).fillna(False).astype(bool)
        return df[mask].reset_index(drop=True)

    @staticmethod
    def filter_beacons(df: pd.DataFrame) -> pd.DataFrame:
        """Keep iBeacon, ucode and Eddystone rows"""
        return ADFilter.filter_by_kind(df, ADFilter.BEACON_KINDS)
