"""Workspace scanning for bytecap."""

import logging
import os
from pathlib import Path

from bytecap.events import SCAN_COMPLETE, EventBus
from bytecap.models import GROUPED_SUFFIX, FileRecord, Inventory, ScanSummary

logger = logging.getLogger(__name__)


def printable_name(name: str) -> str:
    """
    Make a filesystem name safe to print.

    Bytes that are not valid UTF-8 come back from os.scandir as surrogate
    escapes, which cannot be encoded for output. They are shown as \\xNN.
    """
    return os.fsencode(name).decode("utf-8", "backslashreplace")


def walk_files(root: Path) -> list[FileRecord]:
    """
    Collect every regular file below root.

    Uses os.scandir and does not follow symlinks. Entries are visited in
    name order so repeated scans of an unchanged tree agree.
    Files that cannot be stat'ed and directories that cannot be listed are
    skipped; the rest of the tree is still walked.

    Args:
        root: Directory to walk

    Returns:
        FileRecords named relative to root with '/' separators
    """
    files: list[FileRecord] = []

    def _scan(path: str, prefix: str) -> None:
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except (PermissionError, OSError) as exc:
            logger.debug("Skipping unreadable directory %s: %s", path, exc)
            return

        for entry in entries:
            name = f"{prefix}/{entry.name}" if prefix else entry.name
            try:
                if entry.is_file(follow_symlinks=False):
                    size = entry.stat(follow_symlinks=False).st_size
                    files.append(FileRecord.create(printable_name(name), size))
                elif entry.is_dir(follow_symlinks=False):
                    _scan(entry.path, name)
            except (PermissionError, OSError) as exc:
                logger.debug("Skipping unreadable entry %s: %s", entry.path, exc)
                continue

    _scan(str(root), "")
    return files


def scan_directory(
    root: Path | str,
    events: EventBus | None = None,
    grouped_suffix: str = GROUPED_SUFFIX,
) -> Inventory:
    """
    Scan a workspace directory and build its size inventory.

    Best effort: a missing root or a failure at the top level yields an
    empty inventory instead of an exception.

    Args:
        root: Directory to scan
        events: Optional bus that receives a scan-complete summary
        grouped_suffix: Suffix of files accounted as one combined entity

    Returns:
        Inventory of the files found
    """
    root_path = Path(root)
    scan_path = printable_name(str(root_path))

    try:
        if not root_path.is_dir():
            logger.info("Scan root %s does not exist", scan_path)
            return Inventory.empty(scan_path, grouped_suffix)
        files = walk_files(root_path)
    except (PermissionError, OSError) as exc:
        logger.warning("Scan of %s failed: %s", scan_path, exc)
        return Inventory.empty(scan_path, grouped_suffix)

    inventory = Inventory.from_files(files, scan_path, grouped_suffix)

    logger.info(
        "Files processed: %d Total size: %s",
        inventory.file_count,
        inventory.total_size_formatted,
    )
    logger.info(
        "%s files found: %d Combined size: %s",
        grouped_suffix,
        inventory.grouped_file_count,
        inventory.grouped_total_size_formatted,
    )

    if events is not None:
        events.emit(
            SCAN_COMPLETE,
            ScanSummary(
                file_count=inventory.file_count,
                grouped_file_count=inventory.grouped_file_count,
                total_size=inventory.total_size_formatted,
                grouped_total_size=inventory.grouped_total_size_formatted,
            ),
        )

    return inventory
