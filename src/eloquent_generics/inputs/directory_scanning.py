# --- Directory scanning convenience -----------------------------------------
import logging
import os
from typing import Iterator

from eloquent_generics.config import RunConfig
from eloquent_generics.indexer import PhpIndexer
from eloquent_generics.processor import FileResult, refactor_source
from eloquent_generics.rules.eloquent_generic_rule import EloquentGenericRule

logger = logging.getLogger(__name__)


def read_text(path: str) -> str:
    # newline="" keeps \r\n so rewritten files keep their line endings
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: str, text: str):
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def iter_source_files(config: RunConfig) -> Iterator[str]:
    """
    Yields every file with the configured extension under the configured paths.
    Paths that are files are yielded as they are, whatever their extension.
    """
    for root_path in config.paths:
        if os.path.isfile(root_path):
            yield root_path
            continue
        for dirpath, dirnames, filenames in os.walk(root_path):
            # prune in place so os.walk doesn't descend into vendor/ etc.
            dirnames[:] = sorted(d for d in dirnames if d not in config.exclude)
            for fn in sorted(filenames):
                if fn.endswith(config.extension):
                    yield os.path.join(dirpath, fn)


def process_paths(indexer: PhpIndexer, rule: EloquentGenericRule, config: RunConfig) -> Iterator[FileResult]:
    """
    Refactors every source file found for `config`, writing changed files back
    unless it is a dry run. Unreadable or unwritable files are logged and skipped.
    """
    for full in iter_source_files(config):
        try:
            src = read_text(full)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", full, e)
            continue

        result = refactor_source(indexer, rule, src, full)
        if result.changed and not config.dry_run:
            try:
                write_text(full, result.updated)
            except OSError as e:
                logger.warning("Failed to write %s: %s", full, e)
                continue
        yield result
