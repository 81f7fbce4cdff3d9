"""
Svensk ekonomi module - SIE parsing and SRU tax-form generation (INK2).
"""

from .sie_parser import Account, Balance, CompanyInfo, Ledger, SIEParseError, find_next, parse_sie, splits
from .sru import (
    Flag,
    SRUBlankett,
    SRUInfo,
    SRUINK2,
    SRUINK2R,
    SRUINK2S,
    Uppgift,
    build_blanketter,
    build_info,
)

__all__ = [
    "Account", "Balance", "CompanyInfo", "Ledger", "SIEParseError", "find_next", "parse_sie", "splits",
    "Flag", "SRUBlankett", "SRUInfo", "SRUINK2", "SRUINK2R", "SRUINK2S", "Uppgift",
    "build_blanketter", "build_info",
]
