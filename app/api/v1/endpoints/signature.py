from fastapi import APIRouter, Depends, File, UploadFile
from app.core.dependencies import get_signature_service
from app.schemas.signature import (
    ExtensionResponse,
    HeaderLookupResponse,
    SignatureCheckResponse,
    TypeListResponse,
)
from app.services.signature_service import SignatureService

router = APIRouter()


@router.post(
    "/check",
    response_model=SignatureCheckResponse,
    summary="Check an uploaded file's header against its extension",
)
async def check_file(
    file: UploadFile = File(...),
    service: SignatureService = Depends(get_signature_service),
) -> SignatureCheckResponse:
    """
    Read the leading bytes of the upload and report:
    1. Whether the extension is a registered type
    2. Which types the header is consistent with
    3. Whether the header matches the extension
    """
    return await service.inspect_upload(file)


@router.get(
    "/headers/{header}",
    response_model=HeaderLookupResponse,
    summary="List file types matching a hex header",
)
async def lookup_header(
    header: str,
    service: SignatureService = Depends(get_signature_service),
) -> HeaderLookupResponse:
    return service.types_for_header(header)


@router.get(
    "/types",
    response_model=TypeListResponse,
    summary="List registered file types",
)
async def list_types(
    service: SignatureService = Depends(get_signature_service),
) -> TypeListResponse:
    return service.list_types()


@router.get(
    "/types/{extension}",
    response_model=ExtensionResponse,
    summary="Get the headers registered for a file type",
)
async def get_type(
    extension: str,
    service: SignatureService = Depends(get_signature_service),
) -> ExtensionResponse:
    return service.describe_extension(extension)
