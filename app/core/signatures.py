"""
Registry of known file signatures ("magic numbers").

File types and header prefixes are many-to-many: zip has several headers
(504B0304, 504B0506, ...) and 504B0304 belongs to zip, docx, xlsx, pptx.
Some types such as txt have no usable header; they are registered with
the empty prefix "" and skipped during consistency checks.

Headers are kept short where possible so common files still pass, e.g. a
screenshot taken from a video stream starts with FFD8FFFE, which only
matches the canonical JPEG header FFD8FF by prefix.

Sources: https://www.filesignatures.net/index.php ,
http://www.nicetool.net/embed/file_signature.html
"""

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

# Prefix registered for types that cannot be verified by signature
NO_SIGNATURE = ""

_ZIP_HEADERS = (
    "504B0304",
    "504B4C495445",
    "504B537058",
    "504B0506",
    "504B0708",
    "57696E5A6970",
    "504B030414000100",
)
_OOXML_HEADERS = ("504B0304", "504B030414000600")

# File type -> header prefixes (uppercase hex)
TYPE_HEADER_TABLE: dict[str, tuple[str, ...]] = {
    # Text and images
    "txt": (NO_SIGNATURE,),
    "jpg": ("FFD8FF",),
    "jpeg": ("FFD8FF",),
    "png": ("89504E470D0A1A0A",),
    "bmp": ("424D",),
    "gif": ("47494638",),
    "tif": ("492049", "49492A00", "4D4D002A", "4D4D002B"),
    "pic": (NO_SIGNATURE,),
    # Office, legacy and OOXML, plus WPS
    "doc": ("D0CF11E0A1B11AE1", "0D444F43", "CF11E0A1B11AE100", "DBA52D00", "ECA5C100"),
    "docx": _OOXML_HEADERS,
    "wps": ("0E574B53", "FF00020004040554", "D0CF11E0A1B11AE1"),
    "xls": (
        "D0CF11E0A1B11AE1",
        "0908100000060500",
        "FDFFFFFF10",
        "FDFFFFFF1F",
        "FDFFFFFF22",
        "FDFFFFFF23",
        "FDFFFFFF28",
        "FDFFFFFF29",
    ),
    "xlsx": _OOXML_HEADERS,
    "et": (NO_SIGNATURE,),
    "ppt": (
        "D0CF11E0A1B11AE1",
        "006E1EF0",
        "0F00E803",
        "A0461DF0",
        "FDFFFFFF0E000000",
        "FDFFFFFF1C000000",
        "FDFFFFFF43000000",
    ),
    "pptx": _OOXML_HEADERS,
    "pps": ("D0CF11E0A1B11AE1",),
    "pot": (NO_SIGNATURE,),
    "pdf": ("25504446",),
    # CAD
    "dwg": ("41433130",),
    # Video and audio containers
    "mp4": ("000000146674797069736F6D", "0000001866747970", "0000001C66747970"),
    "avi": ("52494646",),
    "rmvb": ("2E524D46",),
    "rm": ("2E524D46",),
    "flv": ("464C56",),
    "wmv": ("3026B2758E66CF11",),
    "mkv": ("1A45DFA393428288",),
    "mov": ("6D6F6F76", "66726565", "6D646174", "77696465", "706E6F74", "736B6970"),
    "mpeg": (NO_SIGNATURE,),
    # Archives
    "zip": _ZIP_HEADERS,
    "mr": _ZIP_HEADERS,
    "rar": ("526172211A0700",),
}


def build_type_headers(
    table: Mapping[str, Iterable[str]],
) -> dict[str, frozenset[str]]:
    """Convert the authored table to type -> set of uppercase headers."""
    return {
        file_type: frozenset(header.upper() for header in headers)
        for file_type, headers in table.items()
    }


def invert_type_headers(
    type_headers: Mapping[str, Iterable[str]],
) -> dict[str, frozenset[str]]:
    """
    Build header -> set of types from type -> set of headers.

    Pure function of its input; the result is the exact inverse index.
    """
    inverted: dict[str, set[str]] = {}
    for file_type, headers in type_headers.items():
        for header in headers:
            inverted.setdefault(header, set()).add(file_type)
    return {header: frozenset(types) for header, types in inverted.items()}


@dataclass(frozen=True)
class SignatureRegistry:
    """
    Read-only pair of indices: type -> headers and header -> types.

    Built once and shared by reference; both mappings are proxies over
    frozensets so no caller can mutate them after construction.
    """

    type_headers: Mapping[str, frozenset[str]]
    header_types: Mapping[str, frozenset[str]]

    @classmethod
    def from_table(
        cls, table: Mapping[str, Iterable[str]]
    ) -> "SignatureRegistry":
        type_headers = build_type_headers(table)
        header_types = invert_type_headers(type_headers)
        return cls(
            type_headers=MappingProxyType(type_headers),
            header_types=MappingProxyType(header_types),
        )

    @property
    def types(self) -> list[str]:
        return sorted(self.type_headers)

    @property
    def headers(self) -> list[str]:
        return sorted(self.header_types)

    def headers_for(self, file_type: Optional[str]) -> frozenset[str]:
        if file_type is None:
            return frozenset()
        return self.type_headers.get(file_type, frozenset())

    def skip_type(self, file_type: Optional[str]) -> bool:
        """True when the type is registered without a signature (e.g. txt)."""
        if file_type is None:
            return False
        return file_type in self.header_types.get(NO_SIGNATURE, frozenset())


@lru_cache(maxsize=None)
def get_registry() -> SignatureRegistry:
    return SignatureRegistry.from_table(TYPE_HEADER_TABLE)
