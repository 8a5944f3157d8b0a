"""
Heuristic pixel analysis of a normalized portrait.

Works on an (h, w, 3|4) uint8 raster, normally the 224x224 canvas built by
utils.analyze_utils.normalize_to_canvas. Alpha is ignored: the canvas has
already been composited onto white.

Two brightness formulas are in play on purpose:
    - luma (0.299R + 0.587G + 0.114B) for the global brightness/contrast pass
    - plain (R + G + B) / 3 for the region heuristics and the Sobel pass
Detection thresholds were tuned against each one; do not unify them.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .confidence import calculate_face_confidence, is_face_detected
from .models import DominantColor, ImageFeatures, ImageQuality

logger = logging.getLogger(__name__)

COLOR_TEMPERATURE_MARGIN = 20
SOBEL_THRESHOLD = 50

# Quality thresholds (encoded bytes / source pixels)
HIGH_QUALITY_BYTES = 500_000
HIGH_QUALITY_PIXELS = 90_000
MEDIUM_QUALITY_BYTES = 100_000
MEDIUM_QUALITY_PIXELS = 40_000

# Region heuristics
SYMMETRY_SAMPLES = 20
SYMMETRY_MAX_DIFF = 50
SYMMETRY_PASS_RATIO = 0.4
EYE_BAND_Y = 0.3
EYE_DARK_LEVEL = 120
EYE_STEP = 3
EYE_MIN_HITS = 3
STRUCTURE_OFFSET = 8
STRUCTURE_MAX_DIFF = 30
STRUCTURE_STEP = 2
STRUCTURE_MIN_HITS = 8


@dataclass(frozen=True)
class Region:
    """Fractional bounds of an area searched for a face."""

    start_y: float
    end_y: float
    start_x: float
    end_x: float


FACE_REGIONS: Tuple[Region, ...] = (
    Region(0.0, 0.5, 0.15, 0.85),  # head of a half-body shot
    Region(0.0, 1.0, 0.0, 1.0),    # close-up portrait
)


@dataclass(frozen=True)
class PatternScores:
    symmetry: int
    features: int
    structure: int

    @property
    def symmetry_passed(self) -> bool:
        return self.symmetry > SYMMETRY_SAMPLES * SYMMETRY_PASS_RATIO

    @property
    def features_passed(self) -> bool:
        return self.features > EYE_MIN_HITS

    @property
    def structure_passed(self) -> bool:
        return self.structure > STRUCTURE_MIN_HITS

    @property
    def passed(self) -> bool:
        """Two of the three indicators are enough."""
        hits = [self.symmetry_passed, self.features_passed, self.structure_passed]
        return sum(hits) >= 2


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def as_rgb(pixels) -> np.ndarray:
    """Return the colour channels of a raster as float64, shape (h, w, 3)."""
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (h, w, 3|4) raster, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError("Raster has no pixels")
    return arr[..., :3].astype(np.float64)


def luma(rgb: np.ndarray) -> np.ndarray:
    return rgb[..., 0] * 0.299 + rgb[..., 1] * 0.587 + rgb[..., 2] * 0.114


def simple_intensity(rgb: np.ndarray) -> np.ndarray:
    return (rgb[..., 0] + rgb[..., 1] + rgb[..., 2]) / 3


def dominant_color(mean_r: float, mean_b: float) -> DominantColor:
    if mean_r > mean_b + COLOR_TEMPERATURE_MARGIN:
        return "warm"
    if mean_b > mean_r + COLOR_TEMPERATURE_MARGIN:
        return "cool"
    return "neutral"


def colorfulness(mean_r: float, mean_g: float, mean_b: float) -> float:
    """Spread of the channel means around their own average."""
    overall = (mean_r + mean_g + mean_b) / 3
    return math.sqrt((mean_r - overall) ** 2 + (mean_g - overall) ** 2 + (mean_b - overall) ** 2)


def image_quality(file_size: int, resolution: int) -> ImageQuality:
    if file_size > HIGH_QUALITY_BYTES and resolution > HIGH_QUALITY_PIXELS:
        return "high"
    if file_size > MEDIUM_QUALITY_BYTES or resolution > MEDIUM_QUALITY_PIXELS:
        return "medium"
    return "low"


def count_skin_tone_pixels(pixels) -> int:
    """Count pixels matching any of the five RGB skin heuristics."""
    rgb = np.asarray(pixels)[..., :3].astype(np.int32)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    bright_warm = (r > 95) & (g > 40) & (b > 20) & (r > g) & (r > b) & ((r - g) > 15) & ((r - b) > 15)
    mid_tone = (
        (r > 60) & (r < 220) & (g > 40) & (g < 200) & (b > 20) & (b < 150)
        & (np.abs(r - g) < 40) & (r > b)
    )
    saturated = (r > 80) & (g > 50) & (b > 30) & (r > g) & (g > b) & ((r - b) > 20)
    light = (r > 180) & (g > 160) & (b > 140) & (r > g) & (g > b) & ((r - b) < 50)
    dark = (r > 40) & (r < 120) & (g > 25) & (g < 90) & (b > 15) & (b < 70) & (r > g) & (g > b)

    return int(np.count_nonzero(bright_warm | mid_tone | saturated | light | dark))


def score_region(intensity: np.ndarray, region: Region) -> PatternScores:
    """Symmetry, eye-band and vertical-structure counts for one region."""
    height, width = intensity.shape
    start_y = math.floor(height * region.start_y)
    end_y = math.floor(height * region.end_y)
    start_x = math.floor(width * region.start_x)
    end_x = math.floor(width * region.end_x)
    region_height = end_y - start_y
    region_width = end_x - start_x

    # Left/right balance at the 25% and 75% columns
    symmetry = 0
    left_x = start_x + math.floor(region_width * 0.25)
    right_x = start_x + math.floor(region_width * 0.75)
    for i in range(SYMMETRY_SAMPLES):
        y = start_y + math.floor((i / SYMMETRY_SAMPLES) * region_height)
        if y >= height - 1:
            continue
        if left_x >= 0 and right_x < width:
            if abs(intensity[y, left_x] - intensity[y, right_x]) < SYMMETRY_MAX_DIFF:
                symmetry += 1

    # Dark spots across the eye band
    features = 0
    eye_y = start_y + math.floor(region_height * EYE_BAND_Y)
    for x in range(start_x + math.floor(region_width * 0.25), start_x + math.floor(region_width * 0.75), EYE_STEP):
        if eye_y < height and x < width and intensity[eye_y, x] < EYE_DARK_LEVEL:
            features += 1

    # Smooth vertical strip down the middle (nose bridge)
    structure = 0
    center_x = start_x + math.floor(region_width / 2)
    side_left = max(start_x, center_x - STRUCTURE_OFFSET)
    side_right = min(end_x - 1, center_x + STRUCTURE_OFFSET)
    for y in range(start_y + math.floor(region_height * 0.2), start_y + math.floor(region_height * 0.8), STRUCTURE_STEP):
        if y < height and center_x < width:
            center = intensity[y, center_x]
            if (
                abs(center - intensity[y, side_left]) < STRUCTURE_MAX_DIFF
                and abs(center - intensity[y, side_right]) < STRUCTURE_MAX_DIFF
            ):
                structure += 1

    scores = PatternScores(symmetry=symmetry, features=features, structure=structure)
    logger.debug(
        "facial pattern region=%s symmetry=%d features=%d structure=%d passed=%s",
        region, symmetry, features, structure, scores.passed,
    )
    return scores


def detect_face_in_region(pixels, region: Region) -> bool:
    return score_region(simple_intensity(as_rgb(pixels)), region).passed


def detect_facial_patterns(pixels) -> bool:
    """True if any face region shows a face-like pattern."""
    intensity = simple_intensity(as_rgb(pixels))
    return any(score_region(intensity, region).passed for region in FACE_REGIONS)


def calculate_edge_detection(pixels) -> int:
    """Count interior pixels whose Sobel magnitude is over the threshold."""
    intensity = simple_intensity(as_rgb(pixels))
    if intensity.shape[0] < 3 or intensity.shape[1] < 3:
        return 0

    tl, tm, tr = intensity[:-2, :-2], intensity[:-2, 1:-1], intensity[:-2, 2:]
    ml, mr = intensity[1:-1, :-2], intensity[1:-1, 2:]
    bl, bm, br = intensity[2:, :-2], intensity[2:, 1:-1], intensity[2:, 2:]

    gx = (tr + 2 * mr + br) - (tl + 2 * ml + bl)
    gy = (bl + 2 * bm + br) - (tl + 2 * tm + tr)
    magnitude = np.sqrt(gx * gx + gy * gy)
    return int(np.count_nonzero(magnitude > SOBEL_THRESHOLD))


def extract_image_features(
    pixels,
    file_size: int,
    source_size: Optional[Tuple[int, int]] = None,
) -> ImageFeatures:
    """
    Compute the feature record for one raster.

    Parameters:
        pixels: (h, w, 3|4) uint8 raster, normally the 224x224 canvas.
        file_size: size in bytes of the encoded upload.
        source_size: (width, height) of the image before normalization;
            used for the quality resolution test and the aspect ratio.
            Defaults to the raster's own size.
    """
    rgb = as_rgb(pixels)
    height, width = rgb.shape[:2]
    pixel_count = height * width

    brightness = luma(rgb)
    avg_brightness = float(brightness.mean())
    mean_r, mean_g, mean_b = (float(m) for m in rgb.reshape(-1, 3).mean(axis=0))
    contrast = float(np.abs(brightness - avg_brightness).mean())

    skin_tone_ratio = count_skin_tone_pixels(pixels) / pixel_count
    facial_pattern = detect_facial_patterns(pixels)
    edges = calculate_edge_detection(pixels)

    confidence = calculate_face_confidence(skin_tone_ratio, facial_pattern, edges)
    face_detected = is_face_detected(skin_tone_ratio, facial_pattern, confidence)

    logger.debug(
        "face detection skin_ratio=%.3f pattern=%s confidence=%.3f detected=%s edges=%d",
        skin_tone_ratio, facial_pattern, confidence, face_detected, edges,
    )

    src_width, src_height = source_size or (width, height)

    return ImageFeatures(
        brightness=round_half_up(avg_brightness),
        contrast=round_half_up(contrast),
        colorfulness=round_half_up(colorfulness(mean_r, mean_g, mean_b)),
        dominant_color=dominant_color(mean_r, mean_b),
        face_detected=face_detected,
        image_quality=image_quality(file_size, src_width * src_height),
        aspect_ratio=src_width / src_height,
        face_confidence=round_half_up(confidence * 100) / 100,
        edge_detection=edges,
        skin_tone_ratio=skin_tone_ratio,
        facial_pattern=facial_pattern,
    )
