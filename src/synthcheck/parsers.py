"""
parsers.py -- flat-file synthesis datasets into the record store.

Reads:
  - the primary list (object number, apgcode, glider count), mandatory
  - secondary list A (overall number, bits, ordinal, reference cost, cost, delta), optional
  - secondary list B (bits, ordinal, cost), optional

Secondary lists carry no apgcodes; their object numbers are resolved through
the lookup built from the primary list. A bad line is logged and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from . import config
from .errors import ConfigurationError, MalformedLineError
from .records import IndexLookup, RecordStore, Source

logger = logging.getLogger(__name__)


@dataclass
class ParseStats:
    source: Source
    lines_read: int = 0
    stored: int = 0
    skipped_sentinel: int = 0
    unresolved: int = 0
    malformed: int = 0

    def summary(self) -> str:
        return (
            f"{self.lines_read} lines read, {self.stored} costs stored, "
            f"{self.skipped_sentinel} without synthesis, {self.unresolved} unresolved, "
            f"{self.malformed} malformed"
        )


def _split(line: str, expected: int) -> List[str]:
    tokens = line.split()
    if len(tokens) != expected:
        raise MalformedLineError(
            "FIELD_COUNT",
            f"Expected {expected} fields, found {len(tokens)}.",
            {"line": line},
        )
    return tokens


def _parse_cost(token: str, line: str) -> Optional[int]:
    """Return the cost as int, or None for a sentinel placeholder."""
    if not config.COST_INTEGER_PATTERN.match(token):
        raise MalformedLineError("INVALID_COST", f"Cost {token!r} is not a non-negative integer.", {"line": line})
    cost = int(token)
    if cost in config.SENTINEL_COSTS:
        return None
    return cost


def _compose_index(major: str, minor: str, line: str) -> str:
    # Kept verbatim: "04.1" and "4.1" are different keys.
    for part in (major, minor):
        if not config.INDEX_PART_PATTERN.match(part):
            raise MalformedLineError("INVALID_INDEX", f"Object number part {part!r} is not numeric.", {"line": line})
    return f"{major}.{minor}"


def tokenize_primary(line: str) -> Tuple[str, str, Optional[int]]:
    number, apgcode, cost = _split(line, config.PRIMARY_FIELDS)
    if not config.CANONICAL_ID_PATTERN.match(apgcode):
        raise MalformedLineError("INVALID_ID", f"{apgcode!r} is not an apgcode.", {"line": line})
    return number, apgcode, _parse_cost(cost, line)


def tokenize_secondary_a(line: str) -> Tuple[str, Optional[int]]:
    _overall, bits, ordinal, _reference, cost, _delta = _split(line, config.SECONDARY_A_FIELDS)
    return _compose_index(bits, ordinal, line), _parse_cost(cost, line)


def tokenize_secondary_b(line: str) -> Tuple[str, Optional[int]]:
    bits, ordinal, cost = _split(line, config.SECONDARY_B_FIELDS)
    return _compose_index(bits, ordinal, line), _parse_cost(cost, line)


def _numbered(lines: Iterable[str], skip_header: bool) -> Iterable[Tuple[int, str]]:
    for lineno, line in enumerate(lines, start=1):
        if skip_header and lineno == 1:
            continue
        if not line.strip():
            continue
        yield lineno, line


def _warn_malformed(source: Source, lineno: int, exc: MalformedLineError) -> None:
    logger.warning("[!] %s line %s skipped (%s): %r", source.value, lineno, exc, exc.details.get("line", ""))


def parse_primary_list(lines: Iterable[str], store: RecordStore) -> ParseStats:
    stats = ParseStats(Source.PRIMARY_LIST)
    for lineno, line in _numbered(lines, skip_header=False):
        stats.lines_read += 1
        try:
            number, apgcode, cost = tokenize_primary(line)
        except MalformedLineError as exc:
            stats.malformed += 1
            _warn_malformed(stats.source, lineno, exc)
            continue
        store.upsert(apgcode, "secondary_index", number)
        if cost is None:
            stats.skipped_sentinel += 1
            continue
        store.upsert(apgcode, Source.PRIMARY_LIST, cost)
        stats.stored += 1
    return stats


def _parse_indexed(lines, store, lookup, source, tokenizer) -> ParseStats:
    stats = ParseStats(source)
    for lineno, line in _numbered(lines, skip_header=True):
        stats.lines_read += 1
        try:
            index, cost = tokenizer(line)
        except MalformedLineError as exc:
            stats.malformed += 1
            _warn_malformed(source, lineno, exc)
            continue
        if cost is None:
            stats.skipped_sentinel += 1
            continue
        if index not in lookup:
            stats.unresolved += 1
            logger.warning("[!] Could not identify object %s from %s line %s: %r", index, source.value, lineno, line)
            continue
        apgcode = lookup.resolve(index)
        store.upsert(apgcode, source, cost)
        stats.stored += 1
    return stats


def parse_secondary_a(lines: Iterable[str], store: RecordStore, lookup: IndexLookup) -> ParseStats:
    return _parse_indexed(lines, store, lookup, Source.SECONDARY_LIST_A, tokenize_secondary_a)


def parse_secondary_b(lines: Iterable[str], store: RecordStore, lookup: IndexLookup) -> ParseStats:
    return _parse_indexed(lines, store, lookup, Source.SECONDARY_LIST_B, tokenize_secondary_b)


def read_dataset_lines(path, required=False):
    """Return the file's lines, None for a missing optional file; a missing required file is fatal."""
    if path is None:
        return None
    path = Path(path)
    if not path.exists():
        if required:
            raise ConfigurationError("MISSING_DATASET", f"{path} not found.", {"path": str(path)})
        logger.info("[*] %s not found; skipping.", path)
        return None
    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        return fh.read().splitlines()


def load_datasets(store, primary_path, secondary_a_path=None, secondary_b_path=None):
    """Parse all datasets in their fixed order and return one ParseStats per dataset read."""
    results = []

    primary_lines = read_dataset_lines(primary_path, required=True)
    logger.info("[*] Reading primary list from %s...", primary_path)
    stats = parse_primary_list(primary_lines, store)
    logger.info("[+] Primary list: %s.", stats.summary())
    results.append(stats)

    lookup = store.build_index_lookup()

    for path, parse in ((secondary_a_path, parse_secondary_a), (secondary_b_path, parse_secondary_b)):
        lines = read_dataset_lines(path)
        if lines is None:
            continue
        logger.info("[*] Reading %s...", path)
        stats = parse(lines, store, lookup)
        logger.info("[+] %s: %s.", stats.source.value, stats.summary())
        results.append(stats)
    return results
