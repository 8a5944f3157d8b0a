import logging
import random
from typing import Dict, Optional, Protocol, Sequence, Tuple

from .models import Category, Gender, ImageFeatures
from .rules import (
    CANDIDATES_BY_GENDER,
    CATEGORIES,
    brightness_points,
    color_points,
    colorfulness_points,
    contrast_points,
    edge_points,
    face_confidence_points,
    quality_points,
)

logger = logging.getLogger(__name__)

# Chance of swapping the computed winner for a random candidate
VARIETY_RATE = 0.2


class RandomSource(Protocol):
    def random(self) -> float: ...

    def choice(self, seq: Sequence[Category]) -> Category: ...


def normalize_gender(gender: Optional[str]) -> Gender:
    """Anything other than male/female means 'no filter'."""
    value = (gender or "").strip().lower()
    if value in ("male", "female"):
        return value  # type: ignore[return-value]
    return "random"


def candidates_for(gender: Optional[str]) -> Tuple[Category, ...]:
    return CANDIDATES_BY_GENDER[normalize_gender(gender)]


def score_categories(features: ImageFeatures) -> Dict[Category, int]:
    """Sum the point table over every feature axis."""
    scores: Dict[Category, int] = {c: 0 for c in CATEGORIES}
    contributions = (
        brightness_points(features.brightness),
        contrast_points(features.contrast),
        color_points(features.dominant_color),
        colorfulness_points(features.colorfulness),
        face_confidence_points(features.face_confidence),
        edge_points(features.edge_detection),
        quality_points(features.image_quality),
    )
    for points in contributions:
        for category, value in points.items():
            scores[category] += value
    return scores


def best_category(scores: Dict[Category, int], candidates: Sequence[Category]) -> Category:
    """Highest total wins; ties go to the earlier candidate."""
    best = candidates[0]
    for category in candidates:
        if scores[category] > scores[best]:
            best = category
    return best


def determine_personality(
    features: ImageFeatures,
    gender: Optional[str] = None,
    rng: Optional[RandomSource] = None,
    variety: float = VARIETY_RATE,
) -> Optional[Category]:
    """
    Pick a category for a portrait, or None when no face was detected.

    Parameters:
        features: feature record of the normalized image.
        gender: "male" / "female" restrict the candidates; anything else
            keeps all four.
        rng: random source for the variety override (random.Random works).
        variety: probability of returning a random candidate instead of
            the best-scoring one. 0 makes the result deterministic.
    """
    # Non-portraits never get a category
    if not features.face_detected:
        return None

    rng = rng or random.Random()
    candidates = candidates_for(gender)
    scores = score_categories(features)
    chosen = best_category(scores, candidates)

    if variety > 0 and rng.random() < variety:
        chosen = rng.choice(candidates)
        logger.debug("variety override picked %s", chosen)

    logger.debug("scores=%s candidates=%s chosen=%s", scores, candidates, chosen)
    return chosen


def align_category(category: Category, gender: Optional[str]) -> Category:
    """
    Move a label onto the declared gender, keeping its teto/egen side.
    Used when a client scored without the gender filter.
    """
    declared = normalize_gender(gender)
    if declared == "random":
        return category
    temperament = "teto" if category.startswith("teto") else "egen"
    suffix = "man" if declared == "male" else "woman"
    return f"{temperament}{suffix}"  # type: ignore[return-value]
