"""Utility functions for discovering and loading model definitions.

This module finds definition files on disk, parses them and applies the
display-name de-duplication expected by the graph builder.
"""

import json
import re
from pathlib import Path
from typing import List, Optional, Pattern, Union

from .core.config import GeneratorConfig
from .core.schema import RawModelRecord, RecordError, record_from_dict
from .logging_config import get_logger

logger = get_logger(__name__)

MODEL_FILE_PATTERN = r"\.settings\.json$"
COMPONENT_FILE_PATTERN = r"\.json$"


class LoaderError(Exception):
    """Custom exception for model loading errors."""

    pass


def find_files(
    directory: Union[str, Path], pattern: Union[str, Pattern[str]] = MODEL_FILE_PATTERN
) -> List[Path]:
    """Recursively find files whose path matches a pattern.

    Args:
        directory: Folder to search.
        pattern: Regular expression matched against the full path.

    Returns:
        Matching files, sorted.

    Raises:
        LoaderError: If the directory does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.error(f"Input directory not found: {directory}")
        raise LoaderError(f"Input directory not found: {directory}")

    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    found = sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and regex.search(path.as_posix())
    )
    logger.debug(f"Found {len(found)} files in {directory}")
    return found


def find_files_from_multiple_directories(*inputs: Union[str, Path]) -> List[Path]:
    """Expand a list of files and folders into definition files.

    Duplicate inputs are visited once; files are taken as they are.
    """
    files: List[Path] = []
    seen = set()

    for item in inputs:
        path = Path(item)
        if path in seen:
            continue
        seen.add(path)

        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(find_files(path))
        else:
            logger.error(f"Input not found: {path}")
            raise LoaderError(f"Input not found: {path}")

    return files


def load_record(file_path: Union[str, Path], is_component: bool = False) -> RawModelRecord:
    """Load one definition file.

    Args:
        file_path: Path to the JSON definition.
        is_component: Whether the file defines a component.

    Returns:
        The parsed record tagged with its absolute path.

    Raises:
        LoaderError: If the file cannot be read or is not a usable definition.
    """
    file_path = Path(file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise LoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise LoaderError(f"Error reading file {file_path}: {e}") from e

    try:
        return record_from_dict(data, file_path.resolve().as_posix(), is_component=is_component)
    except RecordError as e:
        raise LoaderError(str(e)) from e


def import_files(
    files: List[Union[str, Path]],
    results: Optional[List[RawModelRecord]] = None,
    is_component: bool = False,
) -> List[RawModelRecord]:
    """Load definition files into a record list.

    A record whose display name is already present with the same
    classification replaces the earlier record in place. Records with a
    different classification, or without a display name, are appended.

    Args:
        files: Definition files, in load order.
        results: Records loaded so far; extended in place.
        is_component: Classification of every file in this batch.

    Returns:
        The record list.
    """
    records = results if results is not None else []

    for file_path in files:
        record = load_record(file_path, is_component=is_component)

        if not record.name:
            records.append(record)
            continue

        index = next(
            (i for i, existing in enumerate(records) if existing.name == record.name),
            None,
        )
        if index is None or records[index].is_component != record.is_component:
            records.append(record)
        else:
            logger.warning(
                f"Already have model '{record.name}' => skip "
                f"{records[index].filename} use {record.filename}"
            )
            records[index] = record

    return records


def load_models(config: GeneratorConfig) -> List[RawModelRecord]:
    """Load every model and component named by a configuration."""
    if not config.input:
        raise LoaderError("At least one input folder or file is required")

    records = import_files(find_files_from_multiple_directories(*config.input))

    if config.components:
        component_files = find_files(config.components, COMPONENT_FILE_PATTERN)
        import_files(component_files, records, is_component=True)

    logger.info(f"Loaded {len(records)} model definitions")
    return records
