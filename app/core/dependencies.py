from fastapi import Depends
from app.core.config import settings
from app.core.signatures import SignatureRegistry, get_registry
from app.services.signature_service import SignatureService


def get_signature_service(
    registry: SignatureRegistry = Depends(get_registry),
) -> SignatureService:
    return SignatureService(registry, max_upload_size_mb=settings.MAX_UPLOAD_SIZE_MB)
