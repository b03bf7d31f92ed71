"""Metadata helpers for stored files."""

import base64
import hashlib
from collections.abc import Mapping
from typing import Final
from urllib.parse import quote, unquote

# User metadata key holding the display name
NAME_METADATA_KEY: Final = 'Name'

# Characters kept as-is when encoding names into S3 metadata headers
_SAFE_NAME_CHARS: Final = " !#$&'()*+,-./:;=?@[]^_`{|}~"


def derive_file_id(name: str, content: bytes) -> str:
    """Derive a content-addressed file identifier.

    The name and content are hashed together, so the same content
    under another name gets a different identifier.

    Args:
        name: Display name of the file.
        content: Complete file content.

    Returns:
        URL-safe base64 (with padding) of the SHA256 digest of
        name bytes followed by content bytes.
    """
    digest = hashlib.sha256(name.encode() + content).digest()
    return base64.urlsafe_b64encode(digest).decode('ascii')


def encode_display_name(name: str) -> str:
    """Encode display name for an S3 metadata header.

    Header values must be ASCII, non-ASCII characters are
    percent-encoded.

    Args:
        name: Display name.

    Returns:
        ASCII-safe metadata value.
    """
    return quote(name, safe=_SAFE_NAME_CHARS)


def decode_display_name(metadata: Mapping[str, str]) -> str:
    """Read display name back from object metadata.

    S3 backends differ in how they case metadata keys, so
    the lookup ignores case.

    Values are always percent-decoded. Names written raw by another
    writer lose their escapes, ``100%41.txt`` reads back as ``100A.txt``.

    Args:
        metadata: User metadata of the stored object.

    Returns:
        Display name, empty string if it was not recorded.
    """
    wanted = NAME_METADATA_KEY.lower()
    for key, value in metadata.items():
        if key.lower() == wanted:
            return unquote(value)
    return ''
