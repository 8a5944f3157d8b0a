"""
Face confidence: folds the skin-tone ratio, the facial-pattern flag and the
edge count into one score in [0, 1], and decides whether the image counts
as a portrait.
"""

# Skin window a portrait or half-body shot is expected to fall into
SKIN_RATIO_MIN = 0.08
SKIN_RATIO_MAX = 0.8
IDEAL_SKIN_RATIO = 0.18

SKIN_WEIGHT = 0.4
SKIN_DISTANCE_PENALTY = 1.5
PATTERN_WEIGHT = 0.4
EDGE_WEIGHT = 0.2
EDGE_SATURATION = 800

FACE_CONFIDENCE_THRESHOLD = 0.35


def calculate_face_confidence(skin_tone_ratio: float, facial_pattern: bool, edge_score: float) -> float:
    """Return a confidence in [0, 1] that the image shows a face."""
    confidence = 0.0

    # Skin: linear falloff around the ideal ratio, only inside the window
    if SKIN_RATIO_MIN <= skin_tone_ratio <= SKIN_RATIO_MAX:
        distance = abs(skin_tone_ratio - IDEAL_SKIN_RATIO)
        confidence += max(0.0, SKIN_WEIGHT - distance * SKIN_DISTANCE_PENALTY)

    if facial_pattern:
        confidence += PATTERN_WEIGHT

    normalized_edges = min(max(edge_score, 0) / EDGE_SATURATION, 1)
    confidence += normalized_edges * EDGE_WEIGHT

    return min(confidence, 1.0)


def is_face_detected(skin_tone_ratio: float, facial_pattern: bool, confidence: float) -> bool:
    """All three conditions are required; none implies the others."""
    return (
        SKIN_RATIO_MIN < skin_tone_ratio < SKIN_RATIO_MAX
        and bool(facial_pattern)
        and confidence > FACE_CONFIDENCE_THRESHOLD
    )
