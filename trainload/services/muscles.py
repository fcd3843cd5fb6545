"""
Two-tier muscle taxonomy.

Free-text muscle names map many-to-one onto canonical body-part slugs
(MUSCLE_TO_BODY_PART, then KEYWORD_RULES), and slugs map many-to-one onto the
six top-level categories (BODY_PART_TO_CATEGORY). Readiness works on slugs,
balance advice works on categories.
"""

import re

import structlog

logger = structlog.get_logger(__name__)

CATEGORIES = ["Chest", "Back", "Shoulders", "Arms", "Legs", "Core"]

# slug -> display name
BODY_PARTS: dict[str, str] = {
    "chest": "Chest",
    "abs": "Abs",
    "biceps": "Biceps",
    "triceps": "Triceps",
    "forearms": "Forearms",
    "front-deltoids": "Front Deltoids",
    "back-deltoids": "Back Deltoids",
    "deltoids": "Shoulders",
    "trapezius": "Trapezius",
    "lats": "Lats",
    "upper-back": "Upper Back",
    "lower-back": "Lower Back",
    "back": "Back",
    "obliques": "Obliques",
    "neck": "Neck",
    "gluteal": "Glutes",
    "quadriceps": "Quads",
    "hamstring": "Hamstrings",
    "calves": "Calves",
    "ankles": "Ankles",
}

MUSCLE_TO_BODY_PART: dict[str, str] = {
    # Chest
    "chest": "chest",
    "pectorals": "chest",
    "pectoralis major": "chest",
    "pecs": "chest",
    # Back
    "back": "upper-back",
    "lats": "lats",
    "latissimus": "lats",
    "latissimus dorsi": "lats",
    "rhomboids": "upper-back",
    "upper back": "upper-back",
    "lower back": "lower-back",
    "quadratus lumborum": "lower-back",
    "traps": "trapezius",
    "trapezius": "trapezius",
    # Shoulders
    "shoulders": "deltoids",
    "deltoids": "deltoids",
    "anterior deltoid": "front-deltoids",
    "posterior deltoid": "back-deltoids",
    "front deltoids": "front-deltoids",
    "back deltoids": "back-deltoids",
    "rear delts": "back-deltoids",
    # Neck
    "neck": "neck",
    "neck muscles": "neck",
    "sternocleidomastoid": "neck",
    # Arms
    "biceps": "biceps",
    "triceps": "triceps",
    "forearms": "forearms",
    "forearm": "forearms",
    "wrists": "forearms",
    "wrist": "forearms",
    "wrist flexors": "forearms",
    "wrist extensors": "forearms",
    # Core
    "abs": "abs",
    "abdominals": "abs",
    "obliques": "obliques",
    "core": "abs",
    # Legs
    "quads": "quadriceps",
    "quadriceps": "quadriceps",
    "hamstrings": "hamstring",
    "hamstring": "hamstring",
    "glutes": "gluteal",
    "gluteus": "gluteal",
    "gluteus maximus": "gluteal",
    # Lower legs
    "calves": "calves",
    "calf": "calves",
    "calf muscles": "calves",
    "gastrocnemius": "calves",
    "soleus": "calves",
    # Ankles and feet
    "ankles": "ankles",
    "ankle": "ankles",
    "feet": "ankles",
    "foot": "ankles",
}

# Checked in order after the exact lookup misses; more specific rules first.
KEYWORD_RULES: list[tuple[str, str]] = [
    ("anterior delt", "front-deltoids"),
    ("front delt", "front-deltoids"),
    ("posterior delt", "back-deltoids"),
    ("rear delt", "back-deltoids"),
    ("back delt", "back-deltoids"),
    ("lower back", "lower-back"),
    ("quadratus", "lower-back"),
    ("erector", "lower-back"),
    ("upper back", "upper-back"),
    ("latissimus", "lats"),
    ("lats", "lats"),
    ("rhomboid", "upper-back"),
    ("trap", "trapezius"),
    ("delt", "deltoids"),
    ("shoulder", "deltoids"),
    ("pec", "chest"),
    ("chest", "chest"),
    ("bicep", "biceps"),
    ("brachialis", "biceps"),
    ("tricep", "triceps"),
    ("forearm", "forearms"),
    ("wrist", "forearms"),
    ("grip", "forearms"),
    ("oblique", "obliques"),
    ("abdominal", "abs"),
    ("abs", "abs"),
    ("core", "abs"),
    ("quad", "quadriceps"),
    ("hamstring", "hamstring"),
    ("glute", "gluteal"),
    ("calf", "calves"),
    ("calves", "calves"),
    ("ankle", "ankles"),
    ("neck", "neck"),
    ("back", "upper-back"),
]

_KEYWORD_PATTERNS = [(re.compile(rf"\b{re.escape(kw)}"), slug) for kw, slug in KEYWORD_RULES]

BODY_PART_TO_CATEGORY: dict[str, str] = {
    "chest": "Chest",
    "upper-back": "Back",
    "lower-back": "Back",
    "lats": "Back",
    "trapezius": "Back",
    "back": "Back",
    "deltoids": "Shoulders",
    "front-deltoids": "Shoulders",
    "back-deltoids": "Shoulders",
    "neck": "Shoulders",
    "biceps": "Arms",
    "triceps": "Arms",
    "forearms": "Arms",
    "abs": "Core",
    "obliques": "Core",
    "quadriceps": "Legs",
    "hamstring": "Legs",
    "gluteal": "Legs",
    "calves": "Legs",
    "ankles": "Legs",
}


def _clean(name: str) -> str:
    return " ".join(name.strip().lower().replace("_", " ").split())


def slugify(name: str) -> str:
    """Lower-case, dash-separated form of an arbitrary name."""
    return re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")


def normalize_muscle(name: str) -> str:
    """Map a free-text muscle name to its canonical body-part slug.

    Unknown names fall back to their slugified form instead of failing.
    """
    cleaned = _clean(name)
    if cleaned in MUSCLE_TO_BODY_PART:
        return MUSCLE_TO_BODY_PART[cleaned]
    if cleaned.replace(" ", "-") in BODY_PARTS:
        return cleaned.replace(" ", "-")
    for pattern, slug in _KEYWORD_PATTERNS:
        if pattern.search(cleaned):
            return slug
    fallback = slugify(name) or "unknown"
    logger.info("unmapped_muscle", name=name, slug=fallback)
    return fallback


def category_for(slug: str) -> str | None:
    """Return the top-level category for a canonical slug, or None if unmapped."""
    return BODY_PART_TO_CATEGORY.get(slug)


def display_name(slug: str) -> str:
    return BODY_PARTS.get(slug) or " ".join(part.capitalize() for part in slug.split("-") if part)
