"""Ordered phrase tables used by the confidence and feedback heuristics.

Every table is matched by substring containment against the lower-cased
transcript, in the order listed here.
"""

from __future__ import annotations

from typing import Tuple

# (phrase, delta) applied once per phrase when present.
CONFIDENCE_BOOSTERS: Tuple[Tuple[str, float], ...] = (
    ("definitely", 0.10),
    ("absolutely", 0.10),
    ("certainly", 0.10),
    ("i believe", 0.05),
    ("i think", 0.03),
    ("clearly", 0.08),
    ("obviously", 0.08),
    ("without doubt", 0.10),
    ("no worries", 0.05),
)

HESITATION_PENALTIES: Tuple[Tuple[str, float], ...] = (
    ("um", -0.05),
    ("uh", -0.05),
    ("er", -0.05),
    ("maybe", -0.03),
    ("i guess", -0.05),
    ("perhaps", -0.03),
    ("i'm not sure", -0.08),
    ("i don't know", -0.08),
)

# (formal phrase, local idiom)
SLANG_TABLE: Tuple[Tuple[str, str], ...] = (
    ("I'm very tired", "I'm knackered"),
    ("afternoon", "arvo"),
    ("avocado", "avo"),
    ("service station", "servo"),
    ("how are you", "how ya going"),
    ("definitely", "definitely"),
    ("breakfast", "brekky"),
    ("barbecue", "barbie"),
    ("chocolate", "choccy"),
    ("sunglasses", "sunnies"),
    ("umbrella", "brolly"),
    ("football", "footy"),
    ("sandwich", "sanga"),
    ("absolutely", "bloody oath"),
    ("no problem", "no worries"),
)

DEFAULT_SLANG: Tuple[Tuple[str, str], ...] = (
    ("I'm feeling tired", "I'm knackered"),
    ("This afternoon", "This arvo"),
    ("How are you?", "How ya going?"),
    ("No problem", "No worries"),
)
