from typing import List

from .ranking import KIND_MISSING, Discrepancy
from .records import Source

BOLD = "\033[1m"
RESET = "\033[0m"
MISSING_VALUE = "-"

SOURCE_LABELS = {
    Source.PRIMARY_LIST: "Chris C.'s list",
    Source.SECONDARY_LIST_A: "Bob Shemyakin's list",
    Source.SECONDARY_LIST_B: "secondary list B",
    Source.WIKI: "the wiki",
}

COLUMN_HEADERS = {
    Source.WIKI: "wiki",
    Source.PRIMARY_LIST: "chris_c",
    Source.SECONDARY_LIST_A: "bob_s",
    Source.SECONDARY_LIST_B: "list_b",
}


def _format_value(value):
    return MISSING_VALUE if value is None else str(value)


def _mark(text, width, highlighted, color):
    if not highlighted:
        return text.rjust(width)
    if color:
        return " " * (width - len(text)) + BOLD + text + RESET
    return f"*{text}*".rjust(width)


def render_table(discrepancies: List[Discrepancy], color: bool = False) -> str:
    """Render one row per discrepancy: wiki cost, each list's cost (best ones marked), page title."""
    columns = [Source.WIKI] + list(Source.candidates())
    rows = []
    for entry in discrepancies:
        cells = [(_format_value(entry.wiki_cost), False)]
        for src in Source.candidates():
            cells.append((_format_value(entry.values.get(src)), entry.is_best(src)))
        rows.append((cells, entry.display_title))

    # Room for the "*...*" markers when highlighting without color.
    pad = 0 if color else 2
    widths = []
    for idx, src in enumerate(columns):
        width = len(COLUMN_HEADERS[src])
        for cells, _title in rows:
            text, highlighted = cells[idx]
            width = max(width, len(text) + (pad if highlighted else 0))
        widths.append(width)

    lines = ["  ".join(COLUMN_HEADERS[src].rjust(w) for src, w in zip(columns, widths)) + "  page"]
    for cells, title in rows:
        rendered = [_mark(text, w, highlighted, color) for (text, highlighted), w in zip(cells, widths)]
        lines.append("  ".join(rendered) + "  " + title)
    return "\n".join(lines)


def describe(entry: Discrepancy) -> str:
    """One-line summary of a discrepancy, naming the first source holding the best cost."""
    source = SOURCE_LABELS[entry.best_sources[0]]
    if entry.kind == KIND_MISSING:
        return (
            f"{entry.display_title} has no synthesis on the wiki, "
            f"but a {entry.suggested} glider synthesis in {source}."
        )
    return (
        f"{entry.display_title} has a {entry.wiki_cost} glider synthesis on the wiki, "
        f"but a {entry.suggested} glider synthesis in {source}."
    )


def render_sentences(discrepancies: List[Discrepancy]) -> str:
    return "\n".join(describe(entry) for entry in discrepancies)
