import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

# Wiki identity and endpoint
WIKI_HOST = "conwaylife.com"
WIKI_PATH = "/w/"
WIKI_SCHEME = "https"
WIKI_OPERATOR = "Apple Bottom"
HEADERS = {"User-Agent": f"SynthCheck/0.1 (read-only synthesis reconciler; operator: {WIKI_OPERATOR})"}
DEFAULT_CATEGORY = "Strict still lifes"  # or "Still lifes"
CATEGORY_PREFIX = "Category:"

# Account defaults (password is only ever taken from the command line)
DEFAULT_USERNAME = "Apple Bot"
DEFAULT_ANONYMOUS = True

# Flat-file datasets
PRIMARY_LIST_FILE = Path("still_list.txt")  # github.com/ceebo/glider_synth
SECONDARY_A_FILE = Path("bob_shemyakin.txt")  # conwaylife.com forums post
SECONDARY_B_FILE = Path("secondary_b.txt")
PRIMARY_FIELDS = 3
SECONDARY_A_FIELDS = 6
SECONDARY_B_FIELDS = 3

# Placeholder costs meaning "no synthesis known"
SENTINEL_COSTS = frozenset({999, 999999})

# Identifier and wikitext patterns
CANONICAL_ID_PATTERN = re.compile(r"^xs\d+_[0-9a-z]+$")
INDEX_PART_PATTERN = re.compile(r"^\d+$")
COST_INTEGER_PATTERN = re.compile(r"^\d+$")
WIKI_COST_PATTERN = re.compile(r"synthesis\s*=\s*([^\s|]+)")
WIKI_IDENTIFIER_PATTERN = re.compile(r"\{\{LinkCatagolue\|[^}]*?(xs\d+_[0-9a-z]+)")

# Run logging and debug output
LOG_DIR = Path("logs")
LOG_FILE = LOG_DIR / "output.applebot.log"
DEBUG_DUMP_FILE = LOG_DIR / "dumper.txt"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

REPORT_FORMATS = ("table", "sentences")


@dataclass
class RunSettings:
    """Everything a reconciliation run can be configured with."""

    category: str = DEFAULT_CATEGORY
    primary_path: Path = PRIMARY_LIST_FILE
    secondary_a_path: Optional[Path] = SECONDARY_A_FILE
    secondary_b_path: Optional[Path] = SECONDARY_B_FILE
    anonymous: bool = DEFAULT_ANONYMOUS
    username: Optional[str] = DEFAULT_USERNAME
    password: Optional[str] = None
    debug_dump: bool = False
    dump_path: Path = DEBUG_DUMP_FILE
    color: bool = False
    report_format: str = "table"

    def validate(self):
        """Raise ConfigurationError for settings that must stop the run before any network call."""
        if not self.anonymous and (not (self.username or "").strip() or not (self.password or "")):
            raise ConfigurationError(
                "MISSING_CREDENTIALS",
                "No username/password specified for a non-anonymous run.",
                {"username": self.username},
            )
        if not Path(self.primary_path).exists():
            raise ConfigurationError(
                "MISSING_DATASET",
                f"{self.primary_path} not found.",
                {"path": str(self.primary_path)},
            )
        if self.report_format not in REPORT_FORMATS:
            raise ConfigurationError(
                "INVALID_FORMAT",
                f"Unknown report format {self.report_format!r}.",
                {"allowed": list(REPORT_FORMATS)},
            )
