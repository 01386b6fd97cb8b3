import os
import re
import shutil
import logging
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse, unquote
from urllib.request import url2pathname

from mediajob.core.config.settings import settings
from mediajob.core.common.exceptions import ResolutionError
from ..domain.interfaces import IPathResolver, ContentOpener
from .content_opener import LocalContentOpener

logger = logging.getLogger(__name__)

# "C:\videos\a.mp4" parses with scheme "c"; that is still a plain path
_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:[\\/]")


class StagingPathResolver(IPathResolver):
    """
    Resolves source references into local paths.

    - Plain paths are returned unchanged.
    - file:// URIs are converted in place, without copying.
    - Any other scheme is a content reference and is copied into the staging directory.
    """

    def __init__(self, staging_dir: Path = None, opener: ContentOpener = None):
        self.staging_dir = Path(staging_dir or settings.STAGING_DIR)
        self.opener = opener or LocalContentOpener()

    def resolve(self, source_uri: Optional[str]) -> Path:
        if source_uri is None or not str(source_uri).strip():
            raise ResolutionError("Source reference is empty")

        try:
            parsed = urlparse(source_uri)
        except ValueError as e:
            raise ResolutionError(f"Malformed source reference {source_uri!r}: {e}") from e
        scheme = parsed.scheme.lower()

        if not scheme or _WINDOWS_DRIVE.match(source_uri):
            logger.debug(f"Direct path, no staging needed: {source_uri}")
            return Path(source_uri)

        if scheme == "file":
            local_path = Path(url2pathname(parsed.path))
            logger.debug(f"file:// reference resolved to {local_path}")
            return local_path

        return self._stage_copy(source_uri)

    def _stage_copy(self, source_uri: str) -> Path:
        # Destination name is the final segment of the reference, decoded once here
        # so it is not double-encoded when concatenated into engine arguments later.
        raw_segment = source_uri.split("?", 1)[0].split("#", 1)[0].split("/")[-1]
        file_name = Path(unquote(raw_segment)).name
        if file_name in ("", ".", ".."):
            raise ResolutionError(f"Cannot derive a file name from reference: {source_uri}")

        destination = (self.staging_dir / file_name).absolute()
        logger.info(f"Staging {source_uri} -> {destination}")

        try:
            self.staging_dir.mkdir(parents=True, exist_ok=True)
            # Copy into a temp file first; a failed copy never clobbers an already staged file
            fd, tmp_name = tempfile.mkstemp(dir=self.staging_dir, prefix=".staging-")
            try:
                with os.fdopen(fd, "wb") as dst, self.opener(source_uri) as src:
                    shutil.copyfileobj(src, dst)
                os.replace(tmp_name, destination)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, ValueError) as e:
            logger.error(f"Staging failed for {source_uri}: {e}")
            raise ResolutionError(f"Could not stage {source_uri}: {e}") from e

        return destination
