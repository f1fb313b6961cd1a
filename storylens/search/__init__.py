"""Search package exports."""

from storylens.search.mention_search import MentionSearch, characters_in_location, speaker_matches

__all__ = ["MentionSearch", "characters_in_location", "speaker_matches"]
