"""
Synthetic archive segments.

Fixed-layout byte buffers that imitate the headers of compiled Android
artifacts. None of them is executable or verifiable by platform tools; they
only give the archive the expected shape.
"""

from __future__ import annotations

import base64
import hashlib
import struct
import zlib
from collections.abc import Mapping
from datetime import datetime, timezone

DEX_MAGIC = b"dex\n035\x00"
DEX_CHECKSUM_OFFSET = 8
DEX_CHECKSUM_PLACEHOLDER = 0x12345678

ARSC_TYPE_TAG = 0x080C0003

# DER SEQUENCE tag
SIGNATURE_TAG = 0x30

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
ICON_COLOR = (0x3D, 0xDC, 0x84)

CREATED_BY = "APKForge"


def dex_segment(size: int = 8192) -> bytes:
    """Build a zero-filled ``classes.dex`` stand-in with magic and checksum placeholder."""
    buffer = bytearray(size)
    buffer[: len(DEX_MAGIC)] = DEX_MAGIC
    struct.pack_into("<I", buffer, DEX_CHECKSUM_OFFSET, DEX_CHECKSUM_PLACEHOLDER)
    return bytes(buffer)


def arsc_segment(size: int = 4096) -> bytes:
    """Build a zero-filled ``resources.arsc`` stand-in with type tag and size header."""
    buffer = bytearray(size)
    struct.pack_into("<II", buffer, 0, ARSC_TYPE_TAG, size)
    return bytes(buffer)


def signature_blob(size: int = 256) -> bytes:
    """Build the placeholder ``CERT.RSA`` body."""
    return bytes([SIGNATURE_TAG]) * size


def _png_chunk(tag: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(tag + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)


def launcher_icon(size: int = 48, color: tuple[int, int, int] = ICON_COLOR) -> bytes:
    """Encode a square single-colour RGB PNG.

    Args:
        size: Edge length in pixels.
        color: RGB triple.

    Returns:
        bytes: A complete PNG file.
    """
    row = b"\x00" + bytes(color) * size
    header = struct.pack(">IIBBBBB", size, size, 8, 2, 0, 0, 0)
    return (
        PNG_SIGNATURE
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(row * size, 9))
        + _png_chunk(b"IEND", b"")
    )


def sha1_digest(data: bytes) -> str:
    """Base64 SHA-1 digest as used by JAR manifests."""
    return base64.b64encode(hashlib.sha1(data).digest()).decode("ascii")


def jar_manifest(entries: Mapping[str, bytes], built_at: datetime | None = None) -> str:
    """Render ``META-INF/MANIFEST.MF`` with one digest section per entry."""
    built_at = built_at or datetime.now(timezone.utc)
    lines = [
        "Manifest-Version: 1.0",
        f"Created-By: {CREATED_BY}",
        f"Built-Date: {built_at.isoformat()}",
        "",
    ]
    for name, data in entries.items():
        lines += [f"Name: {name}", f"SHA1-Digest: {sha1_digest(data)}", ""]
    return "\r\n".join(lines) + "\r\n"


def signature_file(manifest: str) -> str:
    """Render ``META-INF/CERT.SF`` over a rendered manifest."""
    lines = [
        "Signature-Version: 1.0",
        f"Created-By: {CREATED_BY}",
        f"SHA1-Digest-Manifest: {sha1_digest(manifest.encode('utf-8'))}",
        "",
    ]
    return "\r\n".join(lines) + "\r\n"
