#!/usr/bin/env python3
"""
SRU-filer för Skatteverket: INFO.SRU samt blanketterna INK2, INK2R och INK2S.

Alla blanketter delar samma huvud (#BLANKETT, #IDENTITET, #NAMN,
#SYSTEMINFO, 7011, 7012) och avslutas med #BLANKETTSLUT. Uppgifterna
sorteras stigande på SRU-kod.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_EVEN
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .sie_parser import Balance, Ledger, SIEParseError

CRLF = "\r\n"
TIMESTAMP_FORMAT = "%Y%m%d %H%M%S"
SYSTEMINFO = "Testad på https://www1.skatteverket.se/fv/fv_web/systemval.do?produkt=SRU"


class Flag(Enum):
    """Kryssruta på blanketten"""
    X = "X"


UppgiftValue = Union[int, Flag]


@dataclass(frozen=True)
class Uppgift:
    code: int
    value: UppgiftValue

    def render(self) -> str:
        value = self.value.value if isinstance(self.value, Flag) else self.value
        return f"#UPPGIFT {self.code} {value}"


@dataclass(frozen=True)
class ResultAffectingPosts:
    """Poster från resultaträkningen som påverkar skatteberäkningen."""
    result: Decimal                             # Årets resultat, SRU 7450
    tax: Decimal                                # Skatt på årets resultat, SRU 7528
    tax_interest_cost: Optional[Decimal] = None  # Konto 8423, kostnadsränta skatter
    tax_free_income: Optional[Decimal] = None    # Konto 8314, skattefria ränteintäkter

    @property
    def total(self) -> Decimal:
        posts = [self.result, self.tax, self.tax_interest_cost, self.tax_free_income]
        return sum((p for p in posts if p is not None), Decimal("0"))


class SRUFile:
    """Gemensamt för INFO.SRU och blanketterna."""

    def __init__(self, ledger: Ledger, created: datetime, newline: str = CRLF):
        self.ledger = ledger
        self.created = created
        self.newline = newline

    @property
    def org_nr(self) -> str:
        return f"16{self.ledger.company_info.org_nr}"

    @property
    def timestamp(self) -> str:
        return self.created.strftime(TIMESTAMP_FORMAT)

    def lines(self) -> List[str]:
        return []

    def to_string(self) -> str:
        return self.newline.join(self.lines())


class SRUInfo(SRUFile):
    """INFO.SRU - beskriver leveransen och uppgiftslämnaren."""

    def __init__(self, ledger: Ledger, created: datetime, newline: str = CRLF,
                 program: str = "SIEtoSRU", filename: str = "BLANKETTER.SRU"):
        super().__init__(ledger, created, newline)
        self.program = program
        self.filename = filename

    def lines(self) -> List[str]:
        company_info = self.ledger.company_info
        return [
            "#DATABESKRIVNING_START",
            "#PRODUKT SRU",
            f"#SKAPAD {self.timestamp}",
            f"#PROGRAM {self.program}",
            f"#FILNAMN {self.filename}",
            "#DATABESKRIVNING_SLUT",
            "#MEDIELEV_START",
            f"#ORGNR {self.org_nr}",
            f"#NAMN {company_info.name}",
            f"#POSTNR {company_info.zip_code}",
            f"#POSTORT {company_info.post_address}",
            "#MEDIELEV_SLUT",
        ]


class SRUBlankett(SRUFile):
    """Basklass för blanketterna. Subklasser anger name och uppgifter()."""

    name = ""

    # === AGGREGERING OCH AVRUNDNING ===

    @staticmethod
    def aggregate(balances: Iterable[Balance]) -> List[Tuple[int, Decimal]]:
        """
        Summerar saldon per SRU-kod. Saldon som är exakt noll tas bort
        innan grupperingen.
        """
        grouped: Dict[int, Decimal] = {}
        for b in balances:
            if b.balance == 0:
                continue
            grouped[b.account.sru] = grouped.get(b.account.sru, Decimal("0")) + b.balance
        return list(grouped.items())

    @staticmethod
    def round_to_int(amount: Decimal) -> int:
        """Hela kronor, avrundning till jämnt tal (2.5 -> 2, 3.5 -> 4)."""
        return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_EVEN))

    @staticmethod
    def sign_flip(positive_code: int, negative_code: int, value: int) -> Uppgift:
        """
        Blanketterna saknar tecken: ett belopp redovisas antingen på
        plus-koden eller (negerat) på minus-koden.
        """
        if value >= 0:
            return Uppgift(positive_code, value)
        return Uppgift(negative_code, -value)

    def _sum_results(self, predicate) -> Optional[Decimal]:
        matches = [r.balance for r in self.ledger.results if predicate(r)]
        if not matches:
            return None
        return sum(matches, Decimal("0"))

    def result_affecting_posts(self) -> ResultAffectingPosts:
        """
        Årets resultat (SRU 7450) måste finnas. Skatt (SRU 7528) blir 0 om
        den saknas, kostnadsränta (8423) och skattefria intäkter (8314) är
        frivilliga.
        """
        result = self._sum_results(lambda r: r.account.sru == 7450)
        if result is None:
            raise SIEParseError("Årets resultat (SRU 7450) saknas bland #RES 0")
        tax = self._sum_results(lambda r: r.account.sru == 7528)
        return ResultAffectingPosts(
            result=result,
            tax=tax if tax is not None else Decimal("0"),
            tax_interest_cost=self._sum_results(lambda r: r.account.number == 8423),
            tax_free_income=self._sum_results(lambda r: r.account.number == 8314),
        )

    # === RENDERING ===

    def uppgifter(self) -> List[Uppgift]:
        raise NotImplementedError

    def header(self) -> List[str]:
        return [
            f"#BLANKETT {self.name}",
            f"#IDENTITET {self.org_nr} {self.timestamp}",
            f"#NAMN {self.ledger.company_info.name}",
            f"#SYSTEMINFO {SYSTEMINFO}",
            f"#UPPGIFT 7011 {self.ledger.start_date}",
            f"#UPPGIFT 7012 {self.ledger.end_date}",
        ]

    def lines(self) -> List[str]:
        rows = sorted(self.uppgifter(), key=lambda u: u.code)
        return self.header() + [u.render() for u in rows] + ["#BLANKETTSLUT"]


class SRUINK2(SRUBlankett):
    """Huvudblankett INK2: överskott (7104) eller underskott (7114)."""

    name = "INK2-2017P4"

    def uppgifter(self) -> List[Uppgift]:
        posts = self.result_affecting_posts()
        # Exakt summa avrundas en gång, inte summan av avrundade poster
        return [self.sign_flip(7104, 7114, self.round_to_int(posts.total))]


class SRUINK2R(SRUBlankett):
    """Räkenskapsschema INK2R: balans- och resultaträkning per SRU-kod."""

    name = "INK2R-2017P4"

    def uppgifter(self) -> List[Uppgift]:
        grouped = self.aggregate(self.ledger.ending_balances) + self.aggregate(self.ledger.results)
        rows = []
        for code, amount in grouped:
            value = self.round_to_int(amount)
            # Årets förlust redovisas som positivt belopp på 7550
            if code == 7450 and value < 0:
                rows.append(Uppgift(7550, -value))
            else:
                rows.append(Uppgift(code, value))
        return rows


class SRUINK2S(SRUBlankett):
    """Skattemässiga justeringar INK2S."""

    name = "INK2S-2014P4"

    def uppgifter(self) -> List[Uppgift]:
        posts = self.result_affecting_posts()
        result = self.round_to_int(posts.result)
        rows = [
            Uppgift(7650, result) if result >= 0 else Uppgift(7750, -result),
            Uppgift(7651, self.round_to_int(posts.tax)),
        ]
        if posts.tax_interest_cost is not None:
            rows.append(Uppgift(7653, self.round_to_int(posts.tax_interest_cost)))
        if posts.tax_free_income is not None:
            rows.append(Uppgift(7754, self.round_to_int(posts.tax_free_income)))
        # Summan avrundas för sig, så 7670/7770 kan skilja en krona från
        # summan av de avrundade raderna ovan
        rows.append(self.sign_flip(7670, 7770, self.round_to_int(posts.total)))
        # Uppdragstagare har biträtt vid upprättandet av årsredovisningen: Nej
        rows.append(Uppgift(8041, Flag.X))
        # Årsredovisningen har varit föremål för revision: Nej
        rows.append(Uppgift(8045, Flag.X))
        return rows


BLANKETTER = (SRUINK2, SRUINK2R, SRUINK2S)


def build_blanketter(ledger: Ledger, created: datetime, newline: str = CRLF) -> str:
    """INK2, INK2R och INK2S följt av #FIL_SLUT."""
    blocks = [blankett(ledger, created, newline).to_string() for blankett in BLANKETTER]
    return newline.join(blocks + ["#FIL_SLUT"])


def build_info(ledger: Ledger, created: datetime, newline: str = CRLF,
               program: str = "SIEtoSRU") -> str:
    return SRUInfo(ledger, created, newline, program=program).to_string()
