"""
SRU Routes - Endpoints for converting SIE exports into SRU files.
"""
from fastapi import APIRouter, HTTPException, status
import logging

from siesru.api.models.response import (
    CompanySummary,
    SIEConversionRequest,
    SRUConversionResponse,
    SRUFileNames,
    SRUFilesData,
)
from siesru.config import settings
from siesru.services.sie_file_service import SIEFileService, FileProcessingError
from siesru.services.sru_service import BLANKETTER_FILENAME, INFO_FILENAME, SRUService
from siesru.svensk_ekonomi import SIEParseError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/convert", response_model=SRUConversionResponse)
async def convert_sie(request: SIEConversionRequest):
    """
    Convert a base64 encoded SIE file into INFO.sru and BLANKETTER.sru content.
    Postal code and address are not part of SIE and must be supplied either in
    the request or through configuration.
    """
    postal_code = request.postal_code if request.postal_code is not None else settings.POSTAL_CODE
    postal_address = request.postal_address or settings.POSTAL_ADDRESS
    if postal_code is None or not postal_address:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="postal_code and postal_address are required"
        )

    try:
        logger.info(f"SRU conversion request for file: {request.filename}")

        file_service = SIEFileService()
        sie_text = await file_service.parse_base64_sie(request.file_data, request.filename)

        export = SRUService().convert(sie_text, zip_code=postal_code, post_address=postal_address)
        company = export.ledger.company_info

        return SRUConversionResponse(
            type="sru_files",
            data=SRUFilesData(
                fiscal_year=export.fiscal_year,
                start_date=export.ledger.start_date,
                end_date=export.ledger.end_date,
                company=CompanySummary(name=company.name, org_number=company.org_nr),
                info=export.info,
                blanketter=export.blanketter,
                files=SRUFileNames(info=INFO_FILENAME, blanketter=BLANKETTER_FILENAME),
            )
        )

    except (FileProcessingError, SIEParseError):
        # Mapped to 400/422 by the handlers registered in main.create_app
        raise
    except Exception as e:
        logger.exception("Unexpected error in SRU conversion")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {str(e)}"
        )
