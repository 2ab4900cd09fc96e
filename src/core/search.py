"""
Search Module - Typo-tolerant country search

Ranks country index records against a free-text query across several
fields (name, capital, region) using rapidfuzz similarity scores.
"""

import logging
from typing import List, Dict, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process

from src.core.models import CountryIndexRecord, SearchResult
from src.utils.text_utils import normalize_for_search

logger = logging.getLogger(__name__)

DEFAULT_KEYS = ('name', 'capital', 'region')
DEFAULT_THRESHOLD = 0.3
DEFAULT_LIMIT = 8


class SearchIndex:
    """
    Fuzzy multi-field index over country index records.

    Usage:
        index = SearchIndex(factbook.get_country_index())
        results = index.search("jpan")
    """

    def __init__(
        self,
        records: Sequence[CountryIndexRecord],
        keys: Sequence[str] = DEFAULT_KEYS,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT
    ):
        """
        Args:
            records: Records to index
            keys: Record attributes to match against, in priority order
            threshold: 0.0 (exact only) to 1.0 (match anything)
            limit: Maximum results per query
        """
        self.keys = tuple(keys)
        self.threshold = threshold
        self.limit = limit
        self._records: Sequence[CountryIndexRecord] = ()
        self._choices: Dict[str, Dict[int, Optional[str]]] = {}
        self.rebuild(records)

    @property
    def score_cutoff(self) -> float:
        return max(0.0, min(100.0, (1.0 - self.threshold) * 100.0))

    def __len__(self) -> int:
        return len(self._records)

    def rebuild(self, records: Sequence[CountryIndexRecord]) -> bool:
        """
        Re-index when given a different record list.

        Returns:
            True if the index was rebuilt
        """
        if records is self._records:
            return False

        self._records = records
        self._choices = {
            key: {
                i: (normalize_for_search(getattr(record, key, None)) or None)
                for i, record in enumerate(records)
            }
            for key in self.keys
        }
        logger.debug(f"Search index built over {len(records)} records")
        return True

    def search(self, query: str) -> List[SearchResult]:
        """
        Find the records best matching ``query``.

        Returns:
            Results ordered best first, at most ``limit`` of them; an empty
            query returns no results
        """
        needle = normalize_for_search(query)
        if not needle:
            return []

        # record position -> (exact name match, score, field priority)
        best: Dict[int, Tuple[bool, float, int]] = {}
        for priority, key in enumerate(self.keys):
            matches = process.extract(
                needle,
                self._choices[key],
                scorer=fuzz.WRatio,
                limit=None,
                score_cutoff=self.score_cutoff,
            )
            for value, score, position in matches:
                exact = value == needle
                if exact:
                    score = 100.0
                candidate = (exact and key == 'name', score, priority)
                current = best.get(position)
                if current is None or self._rank(candidate) < self._rank(current):
                    best[position] = candidate

        ranked = sorted(best.items(), key=lambda item: (self._rank(item[1]), item[0]))
        return [
            SearchResult(record=self._records[position], score=score, match_field=self.keys[priority])
            for position, (_, score, priority) in ranked[:self.limit]
        ]

    @staticmethod
    def _rank(candidate: Tuple[bool, float, int]) -> Tuple[int, float, int]:
        exact_name, score, priority = candidate
        return (0 if exact_name else 1, -score, priority)
