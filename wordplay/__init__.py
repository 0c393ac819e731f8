"""
WordPlay - Turn-based word game engine

Players take turns changing a shared word by one letter (add, remove or
rearrange), earning points for length and for playing key letters.
The engine provides:
- A frozen lexicon index (membership, length and anagram buckets)
- Move validation with per-bot rule breaks
- Turn state with atomic commits and history
- Bot move generation with pluggable selection strategies
"""

__version__ = "0.1.0"
