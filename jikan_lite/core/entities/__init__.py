"""
Business entities representing core domain concepts.

Exports:
- Anime: Anime metadata mirrored from the Jikan v4 API
"""

from jikan_lite.core.entities.anime import Anime

__all__ = ["Anime"]
