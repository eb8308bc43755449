"""
ATTOM Data Models

Pydantic models for ATTOM property API payloads. Every sub-object is
optional because the foreclosure, basic-property and demo tiers each fill a
different subset.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AttomModel(BaseModel):
    """Base for ATTOM payload fragments: ignore unknown keys, keep wire names."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)


class AttomIdentifier(AttomModel):
    id: Optional[int] = Field(None, alias="Id")
    fips: Optional[str] = None
    apn: Optional[str] = None


class AttomAddress(AttomModel):
    country: Optional[str] = None
    country_name: Optional[str] = Field(None, alias="countryName")
    state: Optional[str] = None
    locality: Optional[str] = None
    one_line: Optional[str] = Field(None, alias="oneLine")
    postal1: Optional[str] = None


class AttomLot(AttomModel):
    lot_size1: Optional[float] = Field(None, alias="lotSize1")
    pool_type: Optional[str] = Field(None, alias="poolType")


class AttomBuildingSize(AttomModel):
    bldg_size: Optional[float] = Field(None, alias="bldgSize")
    living_size: Optional[float] = Field(None, alias="livingSize")


class AttomRooms(AttomModel):
    beds: Optional[int] = None
    baths: Optional[float] = None
    baths_partial: Optional[int] = Field(None, alias="bathsPartial")


class AttomConstruction(AttomModel):
    year_built: Optional[int] = Field(None, alias="yearBuilt")


class AttomBuilding(AttomModel):
    size: Optional[AttomBuildingSize] = None
    rooms: Optional[AttomRooms] = None
    construction: Optional[AttomConstruction] = None


class AttomMarket(AttomModel):
    mkt_ttl_value: Optional[float] = Field(None, alias="mktTtlValue")


class AttomAssessment(AttomModel):
    market: Optional[AttomMarket] = None


class AttomAvmAmount(AttomModel):
    value: Optional[float] = None


class AttomAvm(AttomModel):
    amount: Optional[AttomAvmAmount] = None


class AttomForeclosure(AttomModel):
    amount: Optional[float] = None
    date: Optional[str] = None
    type: Optional[str] = None
    trustee_phone: Optional[str] = Field(None, alias="trusteePhone")


class AttomProperty(AttomModel):
    """
    One property record as returned by ATTOM.

    Consumed once by the transformer and discarded.
    """

    identifier: Optional[AttomIdentifier] = None
    address: Optional[AttomAddress] = None
    lot: Optional[AttomLot] = None
    building: Optional[AttomBuilding] = None
    assessment: Optional[AttomAssessment] = None
    avm: Optional[AttomAvm] = None
    foreclosure: Optional[AttomForeclosure] = None

    @property
    def market_value(self) -> Optional[float]:
        """Assessed market value, when present."""
        if self.assessment and self.assessment.market:
            return self.assessment.market.mkt_ttl_value
        return None

    @property
    def avm_value(self) -> Optional[float]:
        """Automated valuation, when present."""
        if self.avm and self.avm.amount:
            return self.avm.amount.value
        return None


class AttomStatus(AttomModel):
    version: Optional[str] = None
    code: Optional[int] = None
    msg: Optional[str] = None
    total: Optional[int] = None
    page: Optional[int] = None
    pagesize: Optional[int] = None


class AttomResponse(AttomModel):
    """Paged ATTOM response envelope."""

    status: AttomStatus = Field(default_factory=AttomStatus)
    property: List[AttomProperty] = Field(default_factory=list)
