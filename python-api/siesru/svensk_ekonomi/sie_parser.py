#!/usr/bin/env python3
"""
SIE-parser för inkomstdeklaration (INK2).
Läser den delmängd av SIE4 som behövs för SRU-filerna: företagsnamn,
organisationsnummer, räkenskapsår, kontoplan med SRU-koder, utgående
balanser och resultat för innevarande år.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\r\n"

# Belopp i SIE: ASCII-siffror och decimalpunkt, högst 15 heltalssiffror
AMOUNT_PATTERN = re.compile(r"-?[0-9]{1,15}(\.[0-9]+)?")


class SIEParseError(Exception):
    """Obligatorisk post saknas eller är felaktig - hela konverteringen avbryts."""
    pass


def splits(text: str) -> List[str]:
    """
    Delar en rad på mellanslag. Mellanslag inom citattecken bevaras och
    citattecknen tas bort: 'A "B C" D' -> ["A", "B C", "D"].
    """
    tokens: List[str] = []
    acc = ""
    quoted = False
    for c in text:
        if c == " " and not quoted:
            tokens.append(acc)
            acc = ""
        elif c == '"':
            quoted = not quoted
        else:
            acc += c
    tokens.append(acc)
    return tokens


def find_next(lines: Iterable[str], name: str) -> List[str]:
    """
    Returnerar de uppdelade fälten efter första raden som börjar med #NAME.
    Tom lista om ingen rad matchar.
    """
    prefix = f"#{name}"
    for line in lines:
        if not line.startswith(prefix):
            continue
        rest = line[len(prefix):]
        # "#KONTO" ska inte matcha "#KONTOTYP"
        if rest and not rest.startswith(" "):
            continue
        return splits(rest[1:])
    return []


@dataclass(frozen=True)
class CompanyInfo:
    name: str
    org_nr: str
    zip_code: int
    post_address: str


@dataclass(frozen=True)
class Account:
    number: int
    sru: int
    name: str


@dataclass(frozen=True)
class Balance:
    account: Account
    balance: Decimal


@dataclass(frozen=True)
class Ledger:
    company_info: CompanyInfo
    start_date: str
    end_date: str
    accounts: Tuple[Account, ...]
    ending_balances: Tuple[Balance, ...]
    results: Tuple[Balance, ...]

    @property
    def fiscal_year(self) -> str:
        """Räkenskapsårets fyrsiffriga prefix, t.ex. '2017'."""
        return self.start_date[:4]


def _required(lines: Sequence[str], name: str) -> str:
    fields = find_next(lines, name)
    if not fields or not fields[0]:
        raise SIEParseError(f"#{name} saknas i SIE-filen")
    return fields[0]


def _parse_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise SIEParseError(f"Ogiltigt {what}: {value!r}")


def _parse_decimal(value: str, line: str) -> Decimal:
    if not AMOUNT_PATTERN.fullmatch(value):
        raise SIEParseError(f"Ogiltigt belopp {value!r} på raden {line!r}")
    return Decimal(value)


def parse_company_info(lines: Sequence[str], zip_code: int, post_address: str) -> CompanyInfo:
    """Företagsnamn (#FNAMN) och organisationsnummer (#ORGNR) är obligatoriska."""
    name = _required(lines, "FNAMN")
    org_nr = re.sub(r'[^0-9]', '', _required(lines, "ORGNR"))
    if not org_nr:
        raise SIEParseError("#ORGNR innehåller inget organisationsnummer")
    return CompanyInfo(name=name, org_nr=org_nr, zip_code=zip_code, post_address=post_address)


def parse_fiscal_year(lines: Sequence[str]) -> Tuple[str, str]:
    """Start- och slutdatum för räkenskapsåret med index 0 (#RAR 0 ÅÅÅÅMMDD ÅÅÅÅMMDD)."""
    dates = find_next(lines, "RAR 0")
    if len(dates) < 2:
        raise SIEParseError("#RAR 0 saknas eller är ofullständig")
    start, end = dates[0], dates[1]
    for date in (start, end):
        if len(date) != 8 or not date.isdigit():
            raise SIEParseError(f"Ogiltigt datum i #RAR: {date!r}")
    return start, end


def parse_accounts(lines: Sequence[str]) -> Dict[int, Account]:
    """
    Kontoplan. Konton utan #SRU-rad kan inte hamna i någon blankett och
    tas inte med.
    """
    sru_codes: Dict[int, int] = {}
    for line in lines:
        fields = find_next([line], "SRU")
        if len(fields) < 2:
            continue
        number = _parse_int(fields[0], "kontonummer i #SRU")
        if number not in sru_codes:
            sru_codes[number] = _parse_int(fields[1], f"SRU-kod för konto {number}")

    accounts: Dict[int, Account] = {}
    for line in lines:
        fields = find_next([line], "KONTO")
        if not fields:
            continue
        number = _parse_int(fields[0], "kontonummer i #KONTO")
        if len(fields) < 2:
            raise SIEParseError(f"Kontonamn saknas för konto {number}")
        sru = sru_codes.get(number)
        if sru is None or number in accounts:
            continue
        accounts[number] = Account(number=number, sru=sru, name=fields[1])
    return accounts


def parse_balance(line: str, accounts: Dict[int, Account]) -> Balance:
    """'#UB 0 1930 1234.50' -> Balance(konto 1930, 1234.50)"""
    fields = splits(line[1:])
    if len(fields) < 4:
        raise SIEParseError(f"Ofullständig balansrad: {line!r}")
    number = _parse_int(fields[2], "kontonummer")
    account = accounts.get(number)
    if account is None:
        raise SIEParseError(f"Konto {number} saknas i kontoplanen (eller saknar SRU-kod)")
    return Balance(account=account, balance=_parse_decimal(fields[3], line))


def parse_sie(data: str, zip_code: int, post_address: str) -> Ledger:
    """
    Parsar SIE-innehåll till en Ledger.

    Args:
        data: Hela filens innehåll, rader separerade med CRLF
        zip_code: Postnummer (finns inte i SIE-filen)
        post_address: Postort (finns inte i SIE-filen)

    Raises:
        SIEParseError: om en obligatorisk post saknas eller är felaktig
    """
    lines = data.split(LINE_SEPARATOR)
    company_info = parse_company_info(lines, zip_code, post_address)
    start_date, end_date = parse_fiscal_year(lines)
    accounts = parse_accounts(lines)

    ending_balances: List[Balance] = []
    results: List[Balance] = []
    for line in lines:
        # #UB är utgående balans, 0 anger innevarande år
        if line.startswith("#UB 0 "):
            ending_balances.append(parse_balance(line, accounts))
        # #RES är resultat, 0 anger innevarande år
        elif line.startswith("#RES 0 "):
            results.append(parse_balance(line, accounts))

    logger.debug(
        f"Parsed SIE for {company_info.name}: {len(accounts)} accounts, "
        f"{len(ending_balances)} UB, {len(results)} RES"
    )

    return Ledger(
        company_info=company_info,
        start_date=start_date,
        end_date=end_date,
        accounts=tuple(accounts.values()),
        ending_balances=tuple(ending_balances),
        results=tuple(results),
    )
