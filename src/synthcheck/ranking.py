"""
ranking.py -- decide which wiki pages deserve a better synthesis cost.

For each record matched to a wiki page the best cost over the non-wiki
sources is compared with the wiki's cost. A missing wiki cost and a higher
wiki cost are both reported; every source holding the best cost is flagged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .extract import is_unreadable_token
from .records import ObjectRecord, RecordStore, Source

logger = logging.getLogger(__name__)

KIND_MISSING = "missing"
KIND_SUBOPTIMAL = "suboptimal"


@dataclass(frozen=True)
class Discrepancy:
    display_title: str
    canonical_id: str
    kind: str
    wiki_cost: Optional[int]
    suggested: int
    best_sources: Tuple[Source, ...]
    values: Dict[Source, Optional[int]] = field(default_factory=dict)

    def is_best(self, source: Source) -> bool:
        return source in self.best_sources


def best_candidate(record: ObjectRecord) -> Tuple[Optional[int], Tuple[Source, ...]]:
    """Return the lowest non-wiki cost and every source that reaches it (ties are kept)."""
    known = {src: record.value(src) for src in Source.candidates() if record.value(src) is not None}
    if not known:
        return None, ()
    best = min(known.values())
    return best, tuple(src for src in Source.candidates() if known.get(src) == best)


def evaluate_record(record: ObjectRecord) -> Optional[Discrepancy]:
    if not record.display_title:
        return None
    best, sources = best_candidate(record)
    if best is None:
        return None

    wiki_cost = record.value(Source.WIKI)
    if wiki_cost is None and is_unreadable_token(record.wiki_token):
        logger.debug(
            "[*] %s: wiki synthesis %r is not a glider count; not reported.",
            record.display_title,
            record.wiki_token,
        )
        return None
    if wiki_cost is None:
        kind = KIND_MISSING
    elif best < wiki_cost:
        kind = KIND_SUBOPTIMAL
    else:
        return None

    return Discrepancy(
        display_title=record.display_title,
        canonical_id=record.canonical_id,
        kind=kind,
        wiki_cost=wiki_cost,
        suggested=best,
        best_sources=sources,
        values={src: record.value(src) for src in Source.candidates()},
    )


def build_report(store: RecordStore) -> List[Discrepancy]:
    """Return all reportable discrepancies ordered by page title."""
    report = []
    for record in store:
        try:
            entry = evaluate_record(record)
        except (TypeError, ValueError) as exc:
            logger.debug("[*] %s excluded from report: %s", record.canonical_id, exc)
            continue
        if entry is not None:
            report.append(entry)
    report.sort(key=lambda d: (d.display_title, d.canonical_id))
    return report
