"""
Classification Engine

Maps scores to ordinal buckets and picks the sections to target for
intervention.

Buckets are assigned from the fraction of the maximum attainable score using
an ordered band table: the first band whose lower bound does not exceed the
fraction wins. With the default table a section at 70% or more of its
maximum is Stable, 40% up to 70% is Emerging, and below 40% is
SupportNeeded.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from jaagrmind.catalog.model import Section
from jaagrmind.common.exceptions import ClassificationError
from jaagrmind.submissions.models import Bucket, Classification

logger = logging.getLogger(__name__)

DEFAULT_STABLE_MIN_FRACTION = 0.70
DEFAULT_EMERGING_MIN_FRACTION = 0.40


@dataclass(frozen=True)
class BucketThresholds:
    """
    Fraction cut-points separating the buckets.

    Attributes:
        stable_min: Lowest fraction still classified Stable
        emerging_min: Lowest fraction still classified Emerging
    """
    stable_min: float = DEFAULT_STABLE_MIN_FRACTION
    emerging_min: float = DEFAULT_EMERGING_MIN_FRACTION

    def __post_init__(self):
        if not 0 < self.emerging_min < self.stable_min <= 1:
            raise ClassificationError(
                f"thresholds must satisfy 0 < emerging_min < stable_min <= 1, "
                f"got emerging_min={self.emerging_min} stable_min={self.stable_min}"
            )

    @property
    def bands(self) -> List[Tuple[Bucket, float]]:
        """Bands ordered from the highest lower bound down."""
        return [
            (Bucket.STABLE, self.stable_min),
            (Bucket.EMERGING, self.emerging_min),
            (Bucket.SUPPORT_NEEDED, 0.0),
        ]

    @classmethod
    def from_settings(cls, settings) -> 'BucketThresholds':
        return cls(
            stable_min=settings.STABLE_MIN_FRACTION,
            emerging_min=settings.EMERGING_MIN_FRACTION,
        )


def bucket_of(score: int, max_score: int, thresholds: Optional[BucketThresholds] = None,
              bands: Optional[List[Tuple[Bucket, float]]] = None) -> Bucket:
    """
    Classify a score by its fraction of the maximum.

    A maximum of 0 means nothing could be lost, so the fraction is 1.0.

    Args:
        score: Score obtained
        max_score: Maximum attainable score
        thresholds: Cut-points, defaults to BucketThresholds()
        bands: Explicit band table, overrides ``thresholds``

    Returns:
        The bucket for the score

    Raises:
        ClassificationError: If the score lies outside [0, max_score] or no
            band covers the fraction
    """
    if max_score < 0 or score < 0 or score > max_score:
        raise ClassificationError(f"score {score} is outside the attainable range 0..{max_score}")

    fraction = 1.0 if max_score == 0 else score / max_score
    table = bands if bands is not None else (thresholds or BucketThresholds()).bands

    for bucket, lower_bound in table:
        if fraction >= lower_bound:
            return bucket

    raise ClassificationError(f"no bucket covers fraction {fraction:.3f} (score {score} of {max_score})")


def rank_skill_areas(section_scores: Mapping[Section, int],
                     section_buckets: Mapping[Section, Optional[Bucket]]) -> List[Section]:
    """
    Order sections from most to least in need of intervention.

    Sections without a bucket (no questions) are left out. Ties on bucket
    severity go to the lower raw score, then to the earlier section.
    """
    ranked = [section for section in Section if section_buckets.get(section) is not None]
    ranked.sort(key=lambda s: (section_buckets[s].severity_rank, section_scores.get(s, 0), s.order))
    return ranked


def classify(total_score: int,
             section_scores: Mapping[Section, int],
             section_maxima: Mapping[Section, int],
             thresholds: Optional[BucketThresholds] = None) -> Classification:
    """
    Derive the overall bucket, per-section buckets and skill areas.

    Only sections present in ``section_maxima`` (sections with questions)
    receive a bucket and compete for skill areas. The assessment maximum is
    the sum of the section maxima.

    Args:
        total_score: Sum of all marks
        section_scores: Score per section
        section_maxima: Maximum attainable score per section with questions
        thresholds: Cut-points, defaults to BucketThresholds()

    Returns:
        The classification

    Raises:
        ClassificationError: If a score cannot be placed in a bucket
    """
    thresholds = thresholds or BucketThresholds()
    bands = thresholds.bands

    try:
        section_buckets: Dict[Section, Optional[Bucket]] = {}
        for section in Section:
            if section in section_maxima:
                section_buckets[section] = bucket_of(
                    section_scores.get(section, 0), section_maxima[section], bands=bands
                )
            else:
                section_buckets[section] = None

        assigned_bucket = bucket_of(total_score, sum(section_maxima.values()), bands=bands)
    except ClassificationError as e:
        logger.critical(f"Classification failed: {e.message}")
        raise

    ranked = rank_skill_areas(section_scores, section_buckets)

    return Classification(
        assigned_bucket=assigned_bucket,
        section_buckets=section_buckets,
        primary_skill_area=ranked[0] if ranked else None,
        secondary_skill_area=ranked[1] if len(ranked) >= 2 else None,
    )
