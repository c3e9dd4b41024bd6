import logging
import re
from dataclasses import dataclass
from typing import Optional

from . import config
from .records import RecordStore, Source

logger = logging.getLogger(__name__)


class PatternExtractor:
    """Named single-group regex returning the first match in a page's wikitext."""

    def __init__(self, name, pattern):
        self.name = name
        self.pattern = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)

    def extract(self, text):
        if not text:
            return None
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.group(1)

    def __repr__(self):
        return f"PatternExtractor({self.name!r}, {self.pattern.pattern!r})"


COST_EXTRACTOR = PatternExtractor("synthesis", config.WIKI_COST_PATTERN)
IDENTIFIER_EXTRACTOR = PatternExtractor("apgcode", config.WIKI_IDENTIFIER_PATTERN)


@dataclass(frozen=True)
class WikiFields:
    canonical_id: Optional[str]
    cost: Optional[int]
    raw_cost: Optional[str]


def parse_cost_token(token):
    """Return the integer cost for a wiki synthesis token, None when unknown."""
    if token is None or not config.COST_INTEGER_PATTERN.match(token):
        return None
    cost = int(token)
    if cost in config.SENTINEL_COSTS:
        return None
    return cost


def is_unreadable_token(token):
    """True for a synthesis token that is present but neither a glider count nor a placeholder."""
    if token is None:
        return False
    if config.COST_INTEGER_PATTERN.match(token):
        return False
    return True


def extract_wiki_fields(text):
    raw_cost = COST_EXTRACTOR.extract(text)
    return WikiFields(
        canonical_id=IDENTIFIER_EXTRACTOR.extract(text),
        cost=parse_cost_token(raw_cost),
        raw_cost=raw_cost,
    )


def apply_wiki_page(store: RecordStore, title: str, text: str) -> bool:
    """Attach a page's synthesis cost to its record. Pages without an apgcode are ignored."""
    fields = extract_wiki_fields(text)
    if fields.canonical_id is None:
        logger.debug("[*] %s: no apgcode found; page ignored.", title)
        return False
    if is_unreadable_token(fields.raw_cost):
        logger.debug("[*] %s: synthesis token %r is not a glider count.", title, fields.raw_cost)
    store.upsert(fields.canonical_id, "display_title", title)
    if fields.raw_cost is not None:
        store.upsert(fields.canonical_id, "wiki_token", fields.raw_cost)
    store.upsert(fields.canonical_id, Source.WIKI, fields.cost)
    return True
