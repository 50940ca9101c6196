from abc import ABC, abstractmethod
import logging
from typing import Optional
from ad_decoder.models.ad_structure import ADStructure
from ad_decoder.models.manufacturer_specific import ManufacturerSpecific


class ADStructureDecoder(ABC):
    """
    Decoder for one or more AD types. Returning None means "not applicable",
    which lets the registry try the next decoder registered for the type.
    Plain functions with the same signature can be registered as well.
    """

    def __init__(self) -> None:
        # Initialize a per-instance logger; subclasses should call super().__init__()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def decode(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        pass

    def __call__(self, length: int, ad_type: int, data: bytes) -> Optional[ADStructure]:
        return self.decode(length, ad_type, data)


class ManufacturerSpecificDecoder(ABC):
    """Decoder for the manufacturer specific data (AD type 0xFF) of a company ID."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def decode(self, length: int, ad_type: int, data: bytes, company_id: int) -> Optional[ManufacturerSpecific]:
        pass

    def __call__(self, length: int, ad_type: int, data: bytes, company_id: int) -> Optional[ManufacturerSpecific]:
        return self.decode(length, ad_type, data, company_id)
