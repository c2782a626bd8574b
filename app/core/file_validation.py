"""
File content validation using magic bytes.
Checks whether a file's leading bytes are consistent with its extension.
"""

from typing import Optional

from app.core.file_header import HEADER_SIZE
from app.core.signatures import SignatureRegistry, get_registry

# Header of a file whose first bytes are all zero (e.g. an empty Word document)
EMPTY_HEADER = "00" * HEADER_SIZE


def _normalize(header: Optional[str]) -> Optional[str]:
    return header.upper() if header is not None else None


def prefix_related(registered: str, observed: str) -> bool:
    """True when either header is a prefix of the other."""
    return registered.startswith(observed) or observed.startswith(registered)


def types_for_header(
    header: Optional[str],
    registry: Optional[SignatureRegistry] = None,
) -> Optional[frozenset[str]]:
    """
    Return every file type whose registered header matches `header`.

    Exact matches win. Otherwise every non-blank registered header that
    is a prefix of `header`, or has `header` as a prefix, contributes its
    types. All candidates are returned; None when nothing matches.
    """
    registry = registry or get_registry()
    header = _normalize(header)

    file_types = registry.header_types.get(header) if header is not None else None
    if file_types:
        return file_types
    if header is None:
        return None

    matched: set[str] = set()
    for registered, registered_types in registry.header_types.items():
        if registered.strip() and prefix_related(registered, header):
            matched.update(registered_types)
    return frozenset(matched) if matched else None


def is_valid_extension(
    file_type: Optional[str],
    registry: Optional[SignatureRegistry] = None,
) -> bool:
    """Exact, case-sensitive membership in the registered types."""
    registry = registry or get_registry()
    return file_type is not None and file_type in registry.type_headers


def is_valid_header(
    header: Optional[str],
    registry: Optional[SignatureRegistry] = None,
) -> bool:
    return bool(types_for_header(header, registry))


def is_consistent_type(
    file_type: Optional[str],
    header: Optional[str],
    registry: Optional[SignatureRegistry] = None,
) -> bool:
    """
    Return True if `header` is consistent with the headers registered
    for `file_type`.

    Types without a signature always pass, as does the all-zero header.
    A missing type, a missing header or an unknown type fails.
    """
    registry = registry or get_registry()
    if registry.skip_type(file_type):
        return True

    header = _normalize(header)
    if header == EMPTY_HEADER:
        return True

    expected = registry.headers_for(file_type)
    if not file_type or not file_type.strip() or header is None or not expected:
        return False

    if header in expected:
        return True
    return any(
        registered.strip() and prefix_related(registered, header)
        for registered in expected
    )
