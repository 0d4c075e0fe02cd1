# models.py
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class Hotel(BaseModel):
    name: str = Field(..., description="Hotel name, free text")
    phone: str = Field("", description="DDD-DDD-DDDD")

    @field_validator("name")
    @classmethod
    def _clean_name(cls, v: str) -> str:
        return " ".join(v.split())


class Leg(BaseModel):
    day_code: str = Field(..., description="MO..SU, or 1-7 for relative duty days")
    is_deadhead: bool = False
    flight_number: str
    origin: str
    destination: str
    local_departure: str = Field(..., description="HHMM")
    local_arrival: str = Field(..., description="HHMM")
    block_time: str
    equipment_code: str
    # Only when the leg is not the last of its duty day
    ground_time: Optional[str] = None
    # Only on the last leg of a duty day
    duty_total_block: Optional[str] = None
    duty_total_credit: Optional[str] = None
    duty_total_pay: Optional[str] = None
    duty_total_duty: Optional[str] = None
    # Absent on the pairing's final duty day
    layover_time: Optional[str] = None

    @property
    def ends_duty_day(self) -> bool:
        return self.duty_total_block is not None


class Pairing(BaseModel):
    id: str
    codeshare: str
    base: str = ""
    operating_days: List[int] = Field(default_factory=list)
    report_time: str = Field("", description="HHMM + timezone letter")
    release_time: str = Field("", description="HHMM + timezone letter")
    total_block_time: str = ""
    total_deadhead_time: str = "0"
    total_credit_time: str = ""
    time_away_from_base: str = ""
    landings_count: str = ""
    legs: List[Leg] = Field(default_factory=list)
    hotels: List[Hotel] = Field(default_factory=list)
    length_in_days: int = 0

    @property
    def deadhead_count(self) -> int:
        return sum(1 for leg in self.legs if leg.is_deadhead)


class DutyDay(BaseModel):
    index: int
    legs: List[Leg]
    hotel: Optional[Hotel] = None
    layover_time: Optional[str] = None


class DocumentHeader(BaseModel):
    month_code: str = Field(..., description="JAN..DEC")
    year: str = Field(..., description="Two-digit year")
    codeshare: str
    title: str


class ParseFailure(BaseModel):
    document: str
    pairing_id: str
    field: str
    expected: str
    found: Optional[str] = None
    message: str


class ParseResult(BaseModel):
    document: str
    month_code: Optional[str] = None
    year: Optional[str] = None
    codeshare: Optional[str] = None
    pairings: List[Pairing] = Field(default_factory=list)
    recoveries: int = 0
    processing_time: Dict[str, float] = Field(default_factory=dict)
    error: Optional[ParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_tuple(self) -> Tuple[Optional[str], Optional[str], List[Pairing]]:
        return self.month_code, self.year, self.pairings
