"""
Pydantic request/response models for the SRU conversion API.
"""
from pydantic import BaseModel
from typing import Optional


class SIEConversionRequest(BaseModel):
    file_data: str  # Base64 encoded SIE file
    filename: str
    postal_code: Optional[int] = None      # Falls back to POSTAL_CODE
    postal_address: Optional[str] = None   # Falls back to POSTAL_ADDRESS


class CompanySummary(BaseModel):
    name: str
    org_number: str


class SRUFileNames(BaseModel):
    info: str
    blanketter: str


class SRUFilesData(BaseModel):
    fiscal_year: str
    start_date: str
    end_date: str
    company: CompanySummary
    info: str
    blanketter: str
    files: SRUFileNames


class SRUConversionResponse(BaseModel):
    type: str = "sru_files"
    data: SRUFilesData
