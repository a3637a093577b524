"""
Global configuration for dexsearch.
All paths, vocabularies, and tunable limits live here.
"""

from pathlib import Path

# ── Paths ────────────────────────────────────────────────────────────────────
ROOT_DIR = Path(__file__).resolve().parent.parent
PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.json"
SETTINGS_FILE = ROOT_DIR / "settings.json"

# ── Search vocabularies ──────────────────────────────────────────────────────
TIERS = frozenset({"uber", "ou", "uu", "lc", "cap", "bl", "bl2", "ru", "bl3", "nu"})
COLORS = frozenset({
    "green", "red", "blue", "white", "brown",
    "yellow", "purple", "pink", "gray", "black",
})
GENERATION_RANGE = range(1, 7)  # 1..6 inclusive

# Structural keywords
ALL_KEYWORD = "all"
MEGA_KEYWORDS = frozenset({"mega", "megas"})
FE_KEYWORDS = frozenset({"fe", "fullyevolved"})
NFE_KEYWORDS = frozenset({"nfe", "notfullyevolved"})
TYPE_SUFFIX = " type"

# ── Predicate limits ─────────────────────────────────────────────────────────
MAX_REQUIRED_ABILITIES = 1
MAX_REQUIRED_TYPES = 2
MAX_REQUIRED_MOVES = 4

# ── Catalog legality ─────────────────────────────────────────────────────────
INADMISSIBLE_TIERS = frozenset({"unreleased", "illegal"})
CAP_TIER = "cap"
LC_TIER = "lc"
LC_FORMAT_ID = "lc"

# Moves Smeargle-style "sketch" learnsets can never copy
SKETCH_SOURCE = "sketch"
SKETCH_EXCLUDED_MOVES = frozenset({"chatter", "struggle", "magikarpsrevenge"})

# ── Output ───────────────────────────────────────────────────────────────────
RESULT_LIMIT = 10
NO_RESULTS_MESSAGE = "No Pokémon found."

# ── Desktop front-end ────────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "catalog_path": str(DEFAULT_CATALOG_PATH),
    "broadcast": False,
    "window_geometry": "900x600",
}
