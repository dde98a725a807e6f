"""
In-memory zip archive assembly.

The zip writer streams its output into a chunk sink; the finished archive
is the concatenation of all chunks in emission order. The sink is not
seekable, so entries are written with trailing data descriptors.
"""
import io
import logging
import zipfile
from typing import Awaitable, Callable, List, Set

from patient_export.config.export_settings import ZIP_COMPRESSION_LEVEL
from patient_export.core.exceptions import ArchiveBuildError, NotFoundError, QueryError

logger = logging.getLogger(__name__)

# Fixed entry timestamp keeps archives byte-identical for identical data
ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class _ChunkSink(io.RawIOBase):
    """Write-only stream collecting every chunk the zip writer emits."""

    def __init__(self):
        super().__init__()
        self.chunks: List[bytes] = []
        self._discarded = False

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        if not self._discarded:
            self.chunks.append(bytes(data))
        return len(data)

    def discard(self) -> None:
        """Drop everything written so far and ignore further writes."""
        self._discarded = True
        self.chunks.clear()

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)


class ArchiveWriter:
    """Appends named entries to an archive under construction.

    Each append is synchronous and therefore atomic with respect to other
    coroutines. Entry names must be unique within one archive.
    """

    def __init__(self, archive: zipfile.ZipFile):
        self._archive = archive
        self._names: Set[str] = set()

    def append_entry(self, data: bytes, path: str) -> None:
        """Add one entry.

        Args:
            data: Entry content
            path: Entry name inside the archive ("/" separated)
        """
        if path in self._names:
            logger.warning(f"Duplicate archive entry: {path}")
        self._names.add(path)

        info = zipfile.ZipInfo(path, date_time=ENTRY_DATE_TIME)
        info.external_attr = 0o644 << 16
        self._archive.writestr(
            info,
            data,
            compress_type=zipfile.ZIP_DEFLATED,
            compresslevel=ZIP_COMPRESSION_LEVEL,
        )
        logger.debug(f"Appended {path} ({len(data)} bytes)")


async def with_archive(generate: Callable[[ArchiveWriter], Awaitable[None]]) -> bytes:
    """Run a generator against a fresh archive and return the finished bytes.

    The archive is finalized only after generate has completed, including
    all work it awaits. Any failure discards the partial archive.

    Args:
        generate: Coroutine function receiving the ArchiveWriter

    Returns:
        Complete zip archive

    Raises:
        ArchiveBuildError: If the writer or the generator fails
        QueryError: Data store failures from the generator propagate unchanged
        NotFoundError: Propagates unchanged
    """
    sink = _ChunkSink()
    archive = zipfile.ZipFile(
        sink,
        mode="w",
        compression=zipfile.ZIP_DEFLATED,
        compresslevel=ZIP_COMPRESSION_LEVEL,
    )
    finished = False
    try:
        await generate(ArchiveWriter(archive))
        archive.close()
        finished = True
    except (ArchiveBuildError, NotFoundError, QueryError):
        raise
    except Exception as e:
        logger.error(f"Archive build failed: {e}")
        raise ArchiveBuildError(f"Archive build failed: {e}") from e
    finally:
        if not finished:
            # Release the writer without emitting a central directory
            sink.discard()
            archive.close()

    return sink.getvalue()
