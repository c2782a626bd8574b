from fastapi import UploadFile, HTTPException
from app.core.file_header import HeaderResult, get_extension, read_upload_header
from app.core.file_validation import (
    is_consistent_type,
    is_valid_extension,
    is_valid_header,
    types_for_header,
)
from app.core.signatures import SignatureRegistry
from app.schemas.signature import (
    ExtensionResponse,
    HeaderLookupResponse,
    SignatureCheckResponse,
    TypeListResponse,
)
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class SignatureService:
    """
    Upload-level checks on top of the signature matcher.

    The registry is injected so tests can run against a small table.
    Uploads larger than `max_upload_size_mb` are rejected when it is set;
    only the HTTP layer sets it.
    """

    def __init__(
        self,
        registry: SignatureRegistry,
        max_upload_size_mb: Optional[float] = None,
    ) -> None:
        self.registry = registry
        self.max_upload_size_mb = max_upload_size_mb

    async def _read_header(self, file: UploadFile) -> HeaderResult:
        return await read_upload_header(file)

    async def is_valid_extension(self, file: UploadFile) -> bool:
        return is_valid_extension(get_extension(file.filename), self.registry)

    async def is_valid_header(self, file: UploadFile) -> bool:
        result = await self._read_header(file)
        return is_valid_header(result.header, self.registry)

    async def is_consistent_type(self, file: UploadFile) -> bool:
        extension = get_extension(file.filename)
        # Types without a signature pass without reading the file
        if self.registry.skip_type(extension):
            return True
        result = await self._read_header(file)
        return is_consistent_type(extension, result.header, self.registry)

    async def inspect_upload(self, file: UploadFile) -> SignatureCheckResponse:
        # ── Validation ────────────────────────────────────
        if not file.filename:
            raise HTTPException(
                status_code=400,
                detail="No filename provided",
            )

        if self.max_upload_size_mb is not None and file.size is not None:
            size_mb: float = file.size / (1024 * 1024)
            if size_mb > self.max_upload_size_mb:
                raise HTTPException(
                    status_code=400,
                    detail=f"File too large: {size_mb:.1f}MB. "
                    f"Max: {self.max_upload_size_mb}MB",
                )

        # ── Match ─────────────────────────────────────────
        extension = get_extension(file.filename)
        result = await self._read_header(file)
        candidates = types_for_header(result.header, self.registry) or frozenset()
        consistent = is_consistent_type(extension, result.header, self.registry)

        if not result.ok:
            logger.warning(f"Could not read header of {file.filename}: {result.error}")
        elif not consistent:
            logger.info(
                f"Header {result.header} of {file.filename} does not match "
                f"extension '{extension}'"
            )

        return SignatureCheckResponse(
            filename=file.filename,
            extension=extension,
            header=result.header,
            candidate_types=sorted(candidates),
            is_valid_extension=is_valid_extension(extension, self.registry),
            is_valid_header=bool(candidates),
            is_consistent=consistent,
            error=result.error,
        )

    def types_for_header(self, header: str) -> HeaderLookupResponse:
        types = types_for_header(header, self.registry) or frozenset()
        return HeaderLookupResponse(header=header.upper(), types=sorted(types))

    def describe_extension(self, extension: str) -> ExtensionResponse:
        if not is_valid_extension(extension, self.registry):
            raise HTTPException(
                status_code=404,
                detail=f"File type '{extension}' not registered",
            )
        return ExtensionResponse(
            extension=extension,
            headers=sorted(h for h in self.registry.headers_for(extension) if h),
            skip_check=self.registry.skip_type(extension),
        )

    def list_types(self) -> TypeListResponse:
        types = [self.describe_extension(t) for t in self.registry.types]
        return TypeListResponse(total=len(types), types=types)
