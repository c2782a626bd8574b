"""Service-layer tests for SignatureService with mocked uploads."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException, UploadFile

from app.core.signatures import SignatureRegistry, get_registry
from app.services.signature_service import SignatureService

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01"


def _make_mock_upload(
    filename: str = "github.jpg",
    content: bytes = JPEG_BYTES,
    size: int | None = None,
) -> UploadFile:
    f = MagicMock(spec=UploadFile)
    f.filename = filename
    f.size = len(content) if size is None else size
    f.read = AsyncMock(return_value=content)
    f.seek = AsyncMock()
    return f


@pytest.fixture
def signature_service() -> SignatureService:
    return SignatureService(get_registry())


@pytest.mark.asyncio
async def test_inspect_upload_consistent(signature_service: SignatureService) -> None:
    result = await signature_service.inspect_upload(_make_mock_upload())
    assert result.filename == "github.jpg"
    assert result.extension == "jpg"
    assert result.header == "FFD8FFE0"
    assert result.candidate_types == ["jpeg", "jpg"]
    assert result.is_valid_extension is True
    assert result.is_valid_header is True
    assert result.is_consistent is True
    assert result.error is None


@pytest.mark.asyncio
async def test_inspect_upload_renamed_file(signature_service: SignatureService) -> None:
    """A JPEG renamed to .png is flagged."""
    result = await signature_service.inspect_upload(_make_mock_upload(filename="github.png"))
    assert result.is_valid_extension is True
    assert result.is_consistent is False
    assert result.candidate_types == ["jpeg", "jpg"]


@pytest.mark.asyncio
async def test_inspect_upload_unknown_header(signature_service: SignatureService) -> None:
    result = await signature_service.inspect_upload(
        _make_mock_upload(filename="tool.exe", content=b"MZ\x90\x00\x03")
    )
    assert result.header == "4D5A9000"
    assert result.candidate_types == []
    assert result.is_valid_extension is False
    assert result.is_valid_header is False
    assert result.is_consistent is False


@pytest.mark.asyncio
async def test_inspect_upload_empty_document(signature_service: SignatureService) -> None:
    result = await signature_service.inspect_upload(
        _make_mock_upload(filename="empty.doc", content=b"")
    )
    assert result.header == "00000000"
    assert result.is_consistent is True


@pytest.mark.asyncio
async def test_inspect_upload_rejects_empty_filename(signature_service: SignatureService) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await signature_service.inspect_upload(_make_mock_upload(filename=""))
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_inspect_upload_rejects_large_file() -> None:
    service = SignatureService(get_registry(), max_upload_size_mb=10.0)
    with pytest.raises(HTTPException) as exc_info:
        await service.inspect_upload(_make_mock_upload(size=11 * 1024 * 1024))
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_inspect_upload_without_size_limit(signature_service: SignatureService) -> None:
    result = await signature_service.inspect_upload(
        _make_mock_upload(filename="movie.avi", content=b"RIFF\x00\x00\x00\x00", size=11 * 1024 * 1024)
    )
    assert result.is_consistent is True


@pytest.mark.asyncio
async def test_inspect_upload_read_failure(signature_service: SignatureService) -> None:
    upload = _make_mock_upload(filename="report.pdf")
    upload.read = AsyncMock(side_effect=OSError("connection reset"))
    result = await signature_service.inspect_upload(upload)
    assert result.header is None
    assert result.error == "connection reset"
    assert result.is_consistent is False
    assert result.is_valid_header is False


@pytest.mark.asyncio
async def test_is_consistent_type_skips_unsigned_types(signature_service: SignatureService) -> None:
    upload = _make_mock_upload(filename="notes.txt", content=b"\x00\x01binary")
    assert await signature_service.is_consistent_type(upload) is True
    upload.read.assert_not_called()


@pytest.mark.asyncio
async def test_is_consistent_type_reads_header(signature_service: SignatureService) -> None:
    upload = _make_mock_upload(filename="scan.pdf", content=b"%PDF-1.7")
    assert await signature_service.is_consistent_type(upload) is True
    upload.read.assert_awaited_once_with(4)
    upload.seek.assert_awaited_once_with(0)


@pytest.mark.asyncio
async def test_is_valid_extension_is_case_sensitive(signature_service: SignatureService) -> None:
    assert await signature_service.is_valid_extension(_make_mock_upload(filename="a.jpg")) is True
    assert await signature_service.is_valid_extension(_make_mock_upload(filename="a.JPG")) is False
    assert await signature_service.is_valid_extension(_make_mock_upload(filename="noext")) is False


@pytest.mark.asyncio
async def test_is_valid_header(signature_service: SignatureService) -> None:
    assert await signature_service.is_valid_header(_make_mock_upload()) is True
    assert await signature_service.is_valid_header(
        _make_mock_upload(content=b"\xde\xad\xbe\xef")
    ) is False


def test_types_for_header(signature_service: SignatureService) -> None:
    result = signature_service.types_for_header("ffd8fffe")
    assert result.header == "FFD8FFFE"
    assert result.types == ["jpeg", "jpg"]
    assert signature_service.types_for_header("DEADBEEF").types == []


def test_describe_extension(signature_service: SignatureService) -> None:
    docx = signature_service.describe_extension("docx")
    assert docx.headers == ["504B0304", "504B030414000600"]
    assert docx.skip_check is False
    txt = signature_service.describe_extension("txt")
    assert txt.headers == []
    assert txt.skip_check is True


def test_describe_extension_not_found(signature_service: SignatureService) -> None:
    with pytest.raises(HTTPException) as exc_info:
        signature_service.describe_extension("exe")
    assert exc_info.value.status_code == 404


def test_list_types_uses_injected_registry() -> None:
    service = SignatureService(SignatureRegistry.from_table({"pdf": ["25504446"], "txt": [""]}))
    result = service.list_types()
    assert result.total == 2
    assert [t.extension for t in result.types] == ["pdf", "txt"]
