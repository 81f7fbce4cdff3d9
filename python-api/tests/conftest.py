"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest

from siesru.svensk_ekonomi import Account, Balance, CompanyInfo, Ledger

CRLF = "\r\n"

MINIMAL_SIE_LINES = [
    "#FLAGGA 0",
    '#PROGRAM "Bokio" 1.0',
    "#FORMAT PC8",
    "#GEN 20180115",
    "#SIETYP 4",
    '#FNAMN "Testbolaget AB"',
    "#ORGNR 556677-8899",
    "#RAR 0 20170101 20171231",
    "#RAR -1 20160101 20161231",
    '#KONTO 3000 "Försäljning"',
    "#SRU 3000 7450",
    "#RES 0 3000 -1000.00",
]

SAMPLE_SIE_LINES = [
    "#FLAGGA 0",
    '#PROGRAM "Bokio" 1.0',
    "#FORMAT PC8",
    "#GEN 20180115",
    "#SIETYP 4",
    '#FNAMN "Testbolaget AB"',
    "#ORGNR 556677-8899",
    "#RAR 0 20170101 20171231",
    "#RAR -1 20160101 20161231",
    "#KPTYP BAS2014",
    '#KONTO 1510 "Kundfordringar"',
    '#KONTO 1511 "Kundfordringar koncern"',
    '#KONTO 1930 "Företagskonto"',
    '#KONTO 2081 "Aktiekapital"',
    '#KONTO 2091 "Balanserad vinst eller förlust"',
    '#KONTO 2440 "Leverantörsskulder"',
    '#KONTO 3001 "Försäljning inom Sverige"',
    '#KONTO 5010 "Lokalhyra"',
    '#KONTO 6990 "Övriga externa kostnader"',
    '#KONTO 8314 "Skattefria ränteintäkter"',
    '#KONTO 8423 "Räntekostnader för skatter och avgifter"',
    '#KONTO 8910 "Skatt som belastar årets resultat"',
    '#KONTO 8999 "Årets resultat"',
    "#SRU 1510 7251",
    "#SRU 1511 7251",
    "#SRU 1930 7281",
    "#SRU 2081 7301",
    "#SRU 2091 7301",
    "#SRU 2440 7365",
    "#SRU 3001 7410",
    "#SRU 5010 7513",
    "#SRU 8314 7417",
    "#SRU 8423 7522",
    "#SRU 8910 7528",
    "#SRU 8999 7450",
    "#IB 0 1930 10000.00",
    "#UB 0 1930 60000.50",
    "#UB 0 1510 0.00",
    "#UB 0 1511 500.00",
    "#UB 0 2081 -25000.00",
    "#UB 0 2091 -10000.00",
    "#UB 0 2440 -12000.25",
    "#UB -1 1930 10000.00",
    "#RES 0 3001 -100000.00",
    "#RES 0 5010 40000.00",
    "#RES 0 8314 -100.40",
    "#RES 0 8423 250.60",
    "#RES 0 8910 12000.00",
    "#RES 0 8999 47849.80",
    "#RES -1 3001 -50000.00",
]


def to_sie(lines):
    return CRLF.join(lines) + CRLF


@pytest.fixture
def minimal_sie_text():
    """One result account (3000 -> SRU 7450) with a loss of 1000 kr."""
    return to_sie(MINIMAL_SIE_LINES)


@pytest.fixture
def sample_sie_text():
    """A small but complete year: balance sheet, income statement and closing."""
    return to_sie(SAMPLE_SIE_LINES)


@pytest.fixture
def created():
    return datetime(2018, 3, 5, 14, 7, 9)


@pytest.fixture
def company_info():
    return CompanyInfo(name="Testbolaget AB", org_nr="5566778899", zip_code=11122, post_address="Stockholm")


@pytest.fixture
def make_ledger(company_info):
    """Build a Ledger from (account number, sru, amount) tuples."""

    def _make(ub=(), res=()):
        accounts = {}

        def balance(number, sru, amount):
            account = accounts.setdefault(number, Account(number=number, sru=sru, name=f"Konto {number}"))
            return Balance(account=account, balance=Decimal(amount))

        ending = tuple(balance(*row) for row in ub)
        results = tuple(balance(*row) for row in res)
        return Ledger(
            company_info=company_info,
            start_date="20170101",
            end_date="20171231",
            accounts=tuple(accounts.values()),
            ending_balances=ending,
            results=results,
        )

    return _make
