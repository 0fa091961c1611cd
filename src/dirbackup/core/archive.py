"""Full backups written as a single archive file."""

import logging
import tarfile
import zipfile
from pathlib import Path

from .walker import walk_tree

logger = logging.getLogger(__name__)

TAR_GZ_NAME = "backup.tar.gz"
ZIP_NAME = "backup.zip"


def _iter_files(source: Path, archive_path: Path):
    for entry in walk_tree(source, exclude=(archive_path,)):
        if not entry.is_dir and entry.path.is_file():
            yield entry


def backup_as_tar_gz(source, backup) -> Path:
    """Write every file under ``source`` to ``backup``/backup.tar.gz."""
    source = Path(source)
    tar_path = Path(backup) / TAR_GZ_NAME

    with tarfile.open(tar_path, "w:gz") as tar:
        for entry in _iter_files(source, tar_path):
            tar.add(entry.path, arcname=entry.relative.as_posix(), recursive=False)

    logger.info("Backup saved as %s", tar_path)
    return tar_path


def backup_as_zip(source, backup) -> Path:
    """Write every file under ``source`` to ``backup``/backup.zip."""
    source = Path(source)
    zip_path = Path(backup) / ZIP_NAME

    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for entry in _iter_files(source, zip_path):
            info = zipfile.ZipInfo.from_file(entry.path, entry.relative.as_posix())
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o100644 << 16
            with open(entry.path, "rb") as src, zf.open(info, "w") as dst:
                for chunk in iter(lambda: src.read(1024 * 1024), b""):
                    dst.write(chunk)

    logger.info("Backup saved as %s", zip_path)
    return zip_path
