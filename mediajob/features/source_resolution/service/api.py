from pathlib import Path
from ..data.staging_resolver import StagingPathResolver

def resolve_source(source_uri: str) -> Path:
    """
    Public Service API: Returns a locally readable path for `source_uri`,
    staging a copy into the configured staging directory when needed.
    """
    return StagingPathResolver().resolve(source_uri)
