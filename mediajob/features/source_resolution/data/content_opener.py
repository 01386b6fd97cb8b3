from pathlib import Path
from typing import BinaryIO
from urllib.parse import urlparse, unquote
from urllib.request import urlopen

from mediajob.core.config.settings import settings


class LocalContentOpener:
    """
    Opens content references for staging.

    content://<authority>/<path> is served from CONTENT_ROOT/<authority>/<path>,
    every other scheme is handed to urllib.
    """

    def __init__(self, content_root: Path = None):
        self.content_root = Path(content_root or settings.CONTENT_ROOT)

    def __call__(self, source_uri: str) -> BinaryIO:
        parsed = urlparse(source_uri)

        if parsed.scheme.lower() != "content":
            return urlopen(source_uri)

        root = self.content_root.resolve()
        target = (root / unquote(parsed.netloc) / unquote(parsed.path.lstrip("/"))).resolve()

        # Reject references escaping the provider root (e.g. %2e%2e segments)
        if target != root and root not in target.parents:
            raise PermissionError(f"Content reference outside provider root: {source_uri}")

        return open(target, "rb")
