"""
SRU Service - Converts a SIE export into the two files submitted to Skatteverket.

INFO.sru and BLANKETTER.sru are rendered completely in memory before anything
is written, so a failing conversion never leaves partial files behind.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from siesru.config import settings
from siesru.svensk_ekonomi import Ledger, build_blanketter, build_info, parse_sie

logger = logging.getLogger(__name__)

INFO_FILENAME = "INFO.sru"
BLANKETTER_FILENAME = "BLANKETTER.sru"


@dataclass(frozen=True)
class SRUExport:
    ledger: Ledger
    info: str
    blanketter: str
    created: datetime

    @property
    def fiscal_year(self) -> str:
        return self.ledger.fiscal_year


class SRUService:
    """Parses SIE text, renders INFO/BLANKETTER and writes them to disk."""

    def __init__(self, newline: str = None, program: str = None,
                 encoding: str = None, timezone: str = None):
        self.newline = newline or settings.line_terminator
        self.program = program or settings.SRU_PROGRAM
        self.encoding = encoding or settings.SRU_ENCODING
        self.timezone = timezone or settings.SRU_TIMEZONE

    def now(self) -> datetime:
        """Current time in Swedish local time."""
        return datetime.now(ZoneInfo(self.timezone))

    def convert(self, sie_text: str, zip_code: int, post_address: str,
                created: Optional[datetime] = None) -> SRUExport:
        """
        Parse SIE text and render both SRU files.

        Raises:
            SIEParseError: if a required SIE record is missing or malformed
        """
        created = created or self.now()
        ledger = parse_sie(sie_text, zip_code=zip_code, post_address=post_address)

        info = build_info(ledger, created, self.newline, program=self.program)
        blanketter = build_blanketter(ledger, created, self.newline)

        logger.info(
            f"SRU conversion complete: {ledger.company_info.name} "
            f"({ledger.start_date}-{ledger.end_date}), "
            f"{len(ledger.ending_balances)} UB, {len(ledger.results)} RES"
        )
        return SRUExport(ledger=ledger, info=info, blanketter=blanketter, created=created)

    def write(self, export: SRUExport, output_dir: str = None) -> Tuple[Path, Path]:
        """
        Write INFO.sru and BLANKETTER.sru into <output_dir>/<fiscal year>/.

        Both files are first written as .tmp siblings and only renamed into
        place once both writes succeeded.

        Raises:
            OSError: if the directory or either file cannot be written
        """
        target = Path(output_dir or settings.OUTPUT_DIR) / export.fiscal_year
        target.mkdir(parents=True, exist_ok=True)

        files = [
            (target / INFO_FILENAME, export.info),
            (target / BLANKETTER_FILENAME, export.blanketter),
        ]
        staged = []
        try:
            for path, content in files:
                tmp_path = path.with_name(path.name + ".tmp")
                # newline="" keeps the rendered line terminators untouched
                with open(tmp_path, "w", encoding=self.encoding, errors="replace", newline="") as f:
                    staged.append(tmp_path)
                    f.write(content)
            for tmp_path, (path, _) in zip(staged, files):
                tmp_path.replace(path)
        except OSError as e:
            logger.error(f"❌ Could not write SRU files to {target}: {e}")
            for tmp_path in staged:
                tmp_path.unlink(missing_ok=True)
            raise

        info_path, blanketter_path = files[0][0], files[1][0]
        logger.info(f"Wrote {info_path} and {blanketter_path}")
        return info_path, blanketter_path
