"""
Command line: convert a SIE export into INFO.sru and BLANKETTER.sru.

    siesru {SIEFile}.se {zipCode} {post-address}

Postal code and address are not present in the SIE file and fall back to
POSTAL_CODE / POSTAL_ADDRESS from the environment when omitted.
"""
import argparse
import logging
import sys
from typing import List, Optional

from siesru.config import LINE_TERMINATORS, settings
from siesru.services.sie_file_service import SIEFileService, FileProcessingError
from siesru.services.sru_service import SRUService
from siesru.svensk_ekonomi import SIEParseError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SIE till SRU (INK2, INK2R, INK2S)")
    parser.add_argument("sie_file", help="SIE-fil (.se)")
    parser.add_argument("zip_code", nargs="?", type=int, help="Postnummer")
    parser.add_argument("post_address", nargs="?", help="Postort")
    parser.add_argument("--output-dir", "-o", default=settings.OUTPUT_DIR,
                        help="Katalog där <räkenskapsår>/INFO.sru och BLANKETTER.sru skapas")
    parser.add_argument("--line-ending", choices=sorted(LINE_TERMINATORS), default=settings.SRU_LINE_ENDING,
                        help="Radslut i SRU-filerna")
    parser.add_argument("--no-write", action="store_true", help="Skriv bara ut filerna, spara inte")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if not settings.DEBUG else logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    zip_code = args.zip_code if args.zip_code is not None else settings.POSTAL_CODE
    post_address = args.post_address or settings.POSTAL_ADDRESS
    if zip_code is None or not post_address:
        parser.error("zip_code and post_address are required (or set POSTAL_CODE / POSTAL_ADDRESS)")

    service = SRUService(newline=LINE_TERMINATORS[args.line_ending])
    try:
        sie_text = SIEFileService().read_sie_file(args.sie_file)
        export = service.convert(sie_text, zip_code=zip_code, post_address=post_address)
    except (FileProcessingError, SIEParseError) as e:
        logger.error(f"❌ Conversion failed: {e}")
        return 1

    print(export.info)
    print(export.blanketter)

    if not args.no_write:
        try:
            info_path, blanketter_path = service.write(export, args.output_dir)
        except OSError as e:
            logger.error(f"❌ Could not save SRU files: {e}")
            return 1
        print(f"Sparade {info_path} och {blanketter_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
