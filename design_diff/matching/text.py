"""String similarity helpers for font family comparison."""

import re

GENERIC_FAMILIES = frozenset(["serif", "sans-serif", "monospace", "cursive", "fantasy"])

KNOWN_FAMILIES: dict[str, str] = {
    # sans-serif
    "arial": "sans-serif",
    "helvetica": "sans-serif",
    "helvetica neue": "sans-serif",
    "inter": "sans-serif",
    "roboto": "sans-serif",
    "open sans": "sans-serif",
    "lato": "sans-serif",
    "montserrat": "sans-serif",
    "poppins": "sans-serif",
    "nunito": "sans-serif",
    "raleway": "sans-serif",
    "ubuntu": "sans-serif",
    "verdana": "sans-serif",
    "tahoma": "sans-serif",
    "trebuchet ms": "sans-serif",
    "segoe ui": "sans-serif",
    "system-ui": "sans-serif",
    "-apple-system": "sans-serif",
    "blinkmacsystemfont": "sans-serif",
    "sf pro text": "sans-serif",
    "sf pro display": "sans-serif",
    "work sans": "sans-serif",
    "source sans pro": "sans-serif",
    "noto sans": "sans-serif",
    "ibm plex sans": "sans-serif",
    # serif
    "times": "serif",
    "times new roman": "serif",
    "georgia": "serif",
    "garamond": "serif",
    "baskerville": "serif",
    "cambria": "serif",
    "merriweather": "serif",
    "playfair display": "serif",
    "lora": "serif",
    "pt serif": "serif",
    "noto serif": "serif",
    "ibm plex serif": "serif",
    # monospace
    "courier": "monospace",
    "courier new": "monospace",
    "menlo": "monospace",
    "monaco": "monospace",
    "consolas": "monospace",
    "fira code": "monospace",
    "jetbrains mono": "monospace",
    "source code pro": "monospace",
    "sf mono": "monospace",
    "roboto mono": "monospace",
    "ibm plex mono": "monospace",
    "ui-monospace": "monospace",
}


def levenshtein(a: str, b: str) -> int:
    """Edit distance (insertions, deletions, substitutions)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def similarity_ratio(a: str, b: str) -> float:
    """1 - normalized edit distance, in [0, 1]."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def compact_family(family: str) -> str:
    """Family name without spaces or hyphens ("Helvetica Neue" -> "helveticaneue")."""
    return re.sub(r"[\s-]+", "", family.lower())


def generic_font_class(family: str) -> str | None:
    """Best-effort generic class (serif, sans-serif, monospace) of a family."""
    name = family.strip().lower()
    if name in GENERIC_FAMILIES:
        return name
    if name in KNOWN_FAMILIES:
        return KNOWN_FAMILIES[name]
    if "mono" in name or "code" in name or "courier" in name:
        return "monospace"
    if "sans" in name:
        return "sans-serif"
    if "serif" in name:
        return "serif"
    return None


def family_similarity(first: str, second: str, generic_bonus: float = 0.15) -> float:
    """Similarity of two normalized primary font families.

    Exact match is 1.0. Otherwise the edit-distance ratio of the compacted
    names, plus ``generic_bonus`` (capped at 1.0) when both families belong
    to the same generic class.
    """
    if first == second:
        return 1.0

    a, b = compact_family(first), compact_family(second)
    if a == b:
        return 1.0

    score = similarity_ratio(a, b)
    first_class = generic_font_class(first)
    if first_class is not None and first_class == generic_font_class(second):
        score = min(1.0, score + generic_bonus)
    return score
