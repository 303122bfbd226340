"""
Score Conversion Rubric
competency/scoring/rubric_scorer.py

Converts raw R&D category scores into rubric-aligned converted scores.

Each category has an ordered list of bands (default):
  80 - ∞      → 100
  60 - 79.99  → 80
  40 - 59.99  → 60
   0 - 39.99  → 40

Conversion algorithm:
  1. Cap the raw score at the category's max raw score
  2. Sort bands by range_min
  3. First band containing the score wins
  4. Above the highest band → highest band's converted score
     Anything else unmatched (below the lowest band, or in a gap
     between bands) → lowest band's converted score
  5. No bands configured → raw score unchanged

Usage:
    rubric = ScoreConversionRubric()
    rubric.convert("global_competency", Decimal("28"))
    # Decimal("40")
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence

from competency.models.enumerations import RdCategory


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoringBand:
    """One conversion band; range_max of None means unbounded."""
    range_min: Decimal
    range_max: Optional[Decimal]
    converted_score: Decimal

    def contains(self, raw: Decimal) -> bool:
        if raw < self.range_min:
            return False
        return self.range_max is None or raw <= self.range_max


@dataclass
class ConversionResult:
    category: str
    raw_score: Decimal
    capped_score: Decimal
    converted_score: Decimal
    band: Optional[ScoringBand]


# ---------------------------------------------------------------------------
# Default bands
# ---------------------------------------------------------------------------

DEFAULT_BANDS: List[ScoringBand] = [
    ScoringBand(Decimal("80"), None, Decimal("100")),
    ScoringBand(Decimal("60"), Decimal("79.99"), Decimal("80")),
    ScoringBand(Decimal("40"), Decimal("59.99"), Decimal("60")),
    ScoringBand(Decimal("0"), Decimal("39.99"), Decimal("40")),
]

DEFAULT_MAX_RAW_SCORE = Decimal("100")


def _band(range_min, range_max, converted) -> ScoringBand:
    return ScoringBand(
        range_min=Decimal(str(range_min)),
        range_max=None if range_max is None else Decimal(str(range_max)),
        converted_score=Decimal(str(converted)),
    )


# ---------------------------------------------------------------------------
# ScoreConversionRubric
# ---------------------------------------------------------------------------

class ScoreConversionRubric:
    """Per-category band table with raw-score caps."""

    def __init__(
        self,
        bands: Optional[Mapping[str, Sequence]] = None,
        max_raw_scores: Optional[Mapping[str, float]] = None,
    ):
        self.bands: Dict[str, List[ScoringBand]] = {
            category.value: list(DEFAULT_BANDS) for category in RdCategory
        }
        self.max_raw_scores: Dict[str, Decimal] = {
            category.value: DEFAULT_MAX_RAW_SCORE for category in RdCategory
        }
        for category, category_bands in (bands or {}).items():
            self.set_bands(category, category_bands)
        for category, max_raw in (max_raw_scores or {}).items():
            self.max_raw_scores[self._key(category)] = Decimal(str(max_raw))

    @staticmethod
    def _key(category) -> str:
        return category.value if isinstance(category, RdCategory) else str(category)

    def set_bands(self, category, bands: Sequence) -> None:
        """
        Replace one category's bands.

        Accepts ScoringBand instances or (range_min, range_max, converted)
        tuples. An empty sequence disables conversion for the category.
        """
        parsed = [b if isinstance(b, ScoringBand) else _band(*b) for b in bands]
        for band in parsed:
            if band.range_max is not None and band.range_max < band.range_min:
                raise ValueError(
                    f"Band range_max {band.range_max} is below range_min {band.range_min}"
                )
        self.bands[self._key(category)] = parsed

    def sorted_bands(self, category) -> List[ScoringBand]:
        return sorted(self.bands.get(self._key(category), []), key=lambda b: b.range_min)

    def cap(self, category, raw: Decimal) -> Decimal:
        max_raw = self.max_raw_scores.get(self._key(category), DEFAULT_MAX_RAW_SCORE)
        return min(Decimal(str(raw)), max_raw)

    def convert(self, category, raw: Decimal) -> Decimal:
        """Convert a (capped) raw score through the category's bands."""
        return self.convert_detailed(category, raw).converted_score

    def convert_detailed(self, category, raw: Decimal) -> ConversionResult:
        raw = Decimal(str(raw))
        capped = self.cap(category, raw)
        ordered = self.sorted_bands(category)

        if not ordered:
            return ConversionResult(self._key(category), raw, capped, capped, None)

        band = next((b for b in ordered if b.contains(capped)), None)
        if band is None:
            highest = ordered[-1]
            if highest.range_max is not None and capped > highest.range_max:
                band = highest
            else:
                # below every band, or in a gap such as 79.995
                band = ordered[0]

        return ConversionResult(self._key(category), raw, capped, band.converted_score, band)

    def convert_all(self, raw_scores: Mapping[str, Decimal]) -> Dict[str, ConversionResult]:
        """Convert every RdCategory; missing categories count as 0."""
        results = {}
        for category in RdCategory:
            raw = raw_scores.get(category.value, Decimal("0"))
            results[category.value] = self.convert_detailed(category, raw)
        return results
