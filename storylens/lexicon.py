"""Default word tables used by the heuristic extractors.

The tables are tuned for English fiction with a fantasy flavour. Every table can
be overridden per story through the ``characters``/``locations``/``dialogue``
sections of ``config/config.yaml``.
"""

from __future__ import annotations

from typing import List

DIALOGUE_VERBS: List[str] = [
    "said",
    "asked",
    "replied",
    "answered",
    "whispered",
    "shouted",
    "exclaimed",
    "murmured",
    "called",
    "told",
    "thought",
    "responded",
    "continued",
    "added",
    "muttered",
]

# Subject-position verbs used by the optional character recall pass.
ACTION_VERBS: List[str] = [
    "walked", "ran", "stood", "sat", "looked", "watched", "approached", "entered",
    "left", "moved", "turned", "smiled", "frowned", "nodded", "shook", "reached",
    "touched", "grabbed", "picked", "put", "placed", "took", "gave", "handed",
    "threw", "caught", "opened", "closed", "pushed", "pulled",
]

# "met Alex", "named Morgan"
NAME_MARKERS: List[str] = ["met", "saw", "knew", "told", "asked", "called", "named", "introduced"]

_COMMON_WORDS: List[str] = [
    "The", "A", "An", "And", "But", "Or", "Nor", "For", "So", "Yet", "As", "If",
    "When", "Where", "Why", "How",
    "I", "He", "She", "They", "We", "You", "It", "This", "That", "These", "Those",
    "His", "Her", "Him", "Them", "Their", "Theirs", "Themselves",
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
]

CHARACTER_SKIP_WORDS: List[str] = _COMMON_WORDS + [
    "North", "South", "East", "West", "Northern", "Southern", "Eastern", "Western",
    "Chapter", "Part", "Section", "Page", "Expression", "Face", "Voice", "Hand",
    "Hands", "Eye", "Eyes",
]

LOCATION_SKIP_WORDS: List[str] = _COMMON_WORDS + [
    "Chapter", "Part", "Section", "Page", "Story", "Edge", "All",
    "Northern", "Southern", "Eastern", "Western",
]

PRONOUNS: List[str] = [
    "they", "their", "them", "theirs", "themselves", "he", "she", "it", "we",
    "you", "i", "his", "her", "him",
]

# Single words that name a kind of place; never a character on their own.
LOCATION_WORDS: List[str] = [
    "Forest", "Tower", "Keep", "City", "Village", "Town", "Kingdom", "Realm",
    "Palace", "Castle", "Temple", "Shrine", "River", "Lake", "Sea", "Ocean",
    "Mountain", "Hill", "Valley", "Desert", "Plains", "Field", "Market", "Square",
    "Garden", "Park", "Library", "Academy", "School", "House", "Home", "Inn",
    "Tavern", "Shop", "Store", "Workshop", "Forge", "Dungeon", "Cave", "Ruins",
    "Tomb", "Grave", "Gate", "Bridge", "Road", "Path", "Street", "Hall", "Room",
    "Chamber",
]

# Words that mark a compound name as a place ("Crystal Tower").
CHARACTER_LOCATION_KEYWORDS: List[str] = [
    "Tower", "Forest", "Keep", "Palace", "Castle", "Temple", "Shrine", "River",
    "Lake", "Mountain", "Valley", "Desert", "Plains", "Field", "Market", "Square",
    "Garden", "Park", "Library", "Academy", "School", "House", "Inn", "Tavern",
    "Shop", "Workshop", "Forge", "Dungeon", "Cave", "Ruins", "Tomb", "Gate",
    "Bridge", "Road", "Path", "Street", "Hall", "Room", "Chamber",
]

LOCATION_KEYWORDS: List[str] = list(LOCATION_WORDS)

LOCATION_PREPOSITIONS: List[str] = [
    "in", "at", "to", "from", "near", "inside", "outside", "within", "through",
    "across", "beyond", "into", "toward", "towards", "around", "behind",
]

MOVEMENT_VERBS: List[str] = [
    "went", "arrived", "traveled", "travelled", "journeyed", "headed", "returned",
    "reached", "visited", "walked", "ran", "rode",
]

LOCATION_ACTION_VERBS: List[str] = [
    "entered", "exited", "left", "explored", "crossed", "approached", "departed",
    "fled", "climbed",
]

ARTICLES: List[str] = ["the", "a", "an"]
