"""
records.py -- per-object record store shared by every source of synthesis costs.

Each still life is addressed by its apgcode (the canonical id). Flat-file
datasets and the wiki contribute at most one cost per source; an absent cost
means "this source has no opinion", never zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class Source(str, Enum):
    PRIMARY_LIST = "primary_list"
    SECONDARY_LIST_A = "secondary_list_a"
    SECONDARY_LIST_B = "secondary_list_b"
    WIKI = "wiki"

    @classmethod
    def candidates(cls) -> Tuple["Source", ...]:
        """Non-wiki sources, in report column order."""
        return (cls.PRIMARY_LIST, cls.SECONDARY_LIST_A, cls.SECONDARY_LIST_B)


ATTRIBUTE_FIELDS = ("secondary_index", "display_title", "wiki_token")


@dataclass
class ObjectRecord:
    canonical_id: str
    secondary_index: Optional[str] = None
    source_values: Dict[Source, Optional[int]] = field(default_factory=dict)
    display_title: Optional[str] = None
    wiki_token: Optional[str] = None

    def value(self, source: Source) -> Optional[int]:
        return self.source_values.get(source)

    def has_opinion(self, source: Source) -> bool:
        return self.source_values.get(source) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "canonical_id": self.canonical_id,
            "secondary_index": self.secondary_index,
            "display_title": self.display_title,
            "wiki_token": self.wiki_token,
            "source_values": {src.value: cost for src, cost in sorted(self.source_values.items())},
        }


class IndexLookup:
    """One-shot secondary index -> canonical id mapping (exact string match only)."""

    def __init__(self, mapping: Optional[Dict[str, str]] = None):
        self._mapping = dict(mapping or {})

    def resolve(self, index: str) -> Optional[str]:
        return self._mapping.get(index)

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, index: object) -> bool:
        return index in self._mapping


class RecordStore:
    """Mapping canonical id -> ObjectRecord. Records are created lazily and never removed."""

    def __init__(self):
        self._records: Dict[str, ObjectRecord] = {}

    def upsert(self, canonical_id: str, field_name: Union[Source, str], value: Any) -> ObjectRecord:
        record = self._records.get(canonical_id)
        if record is None:
            record = ObjectRecord(canonical_id=canonical_id)
            self._records[canonical_id] = record

        if isinstance(field_name, Source):
            previous = record.source_values.get(field_name)
            # A known cost is never cleared by a later "no opinion".
            if value is None and previous is not None:
                return record
            if previous is not None and previous != value:
                logger.debug(
                    "[*] %s: %s cost %s replaced by %s.",
                    canonical_id,
                    field_name.value,
                    previous,
                    value,
                )
            record.source_values[field_name] = value
            return record

        if field_name not in ATTRIBUTE_FIELDS:
            raise ValueError(f"Unknown record field {field_name!r}.")
        setattr(record, field_name, value)
        return record

    def get(self, canonical_id: str) -> Optional[ObjectRecord]:
        return self._records.get(canonical_id)

    def all_ids(self) -> List[str]:
        return sorted(self._records)

    def records(self) -> List[ObjectRecord]:
        return [self._records[cid] for cid in self.all_ids()]

    def build_index_lookup(self) -> IndexLookup:
        """
        Build the secondary index lookup from every record that carries both keys.
        Call only once the primary list is fully parsed.
        """
        mapping: Dict[str, str] = {}
        for canonical_id in self.all_ids():
            index = self._records[canonical_id].secondary_index
            if not index:
                continue
            existing = mapping.get(index)
            if existing is not None and existing != canonical_id:
                logger.warning(
                    "[!] Object number %s is claimed by both %s and %s; using %s.",
                    index,
                    existing,
                    canonical_id,
                    canonical_id,
                )
            mapping[index] = canonical_id
        return IndexLookup(mapping)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {cid: self._records[cid].to_dict() for cid in self.all_ids()}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, canonical_id: object) -> bool:
        return canonical_id in self._records

    def __iter__(self) -> Iterator[ObjectRecord]:
        return iter(self.records())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordStore):
            return NotImplemented
        return self.to_dict() == other.to_dict()
