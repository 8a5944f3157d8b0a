from typing import Dict, Tuple
from .models import Category, Gender, ImageQuality, DominantColor

# Point table for the personality quiz. Each function buckets one feature
# and returns the points it adds per category. The constants are
# hand-tuned; changing any of them changes quiz outcomes.

CATEGORIES: Tuple[Category, ...] = ("tetoman", "egenman", "tetowoman", "egenwoman")

CANDIDATES_BY_GENDER: Dict[Gender, Tuple[Category, ...]] = {
    "male": ("tetoman", "egenman"),
    "female": ("tetowoman", "egenwoman"),
    "random": CATEGORIES,
}

Points = Dict[Category, int]


def brightness_points(brightness: float) -> Points:
    """Bright photos lean teto, dim ones egen."""
    if brightness > 185:
        return {"tetoman": 35, "tetowoman": 40}
    if brightness > 160:
        return {"tetoman": 30, "tetowoman": 35}
    if brightness < 130:
        return {"egenman": 35, "egenwoman": 30}
    if brightness < 155:
        return {"egenman": 25, "egenwoman": 30}
    return {"tetoman": 15, "tetowoman": 15, "egenman": 20, "egenwoman": 20}


def contrast_points(contrast: float) -> Points:
    """Crisp contrast leans teto, soft contrast egen."""
    if contrast > 60:
        return {"tetoman": 30, "tetowoman": 35}
    if contrast > 40:
        return {"tetoman": 20, "tetowoman": 25, "egenman": 10, "egenwoman": 10}
    if contrast < 30:
        return {"egenman": 30, "egenwoman": 35}
    return {"egenman": 25, "egenwoman": 30}


def color_points(dominant_color: DominantColor) -> Points:
    if dominant_color == "warm":
        return {"tetoman": 25, "tetowoman": 30, "egenman": 10, "egenwoman": 10}
    if dominant_color == "cool":
        return {"egenman": 30, "egenwoman": 25}
    return {"tetoman": 18, "tetowoman": 18, "egenman": 12, "egenwoman": 15}


def colorfulness_points(colorfulness: float) -> Points:
    if colorfulness > 30:
        return {"tetoman": 25, "tetowoman": 35}
    if colorfulness > 18:
        return {"tetoman": 18, "tetowoman": 22, "egenman": 12, "egenwoman": 15}
    if colorfulness < 12:
        return {"egenman": 30, "egenwoman": 35}
    return {"egenman": 25, "egenwoman": 30}


def face_confidence_points(face_confidence: float) -> Points:
    """A clearly visible face reads as direct self-presentation (teto)."""
    if face_confidence > 0.7:
        return {"tetoman": 20, "tetowoman": 20}
    if face_confidence > 0.5:
        return {"tetoman": 10, "tetowoman": 10, "egenman": 5, "egenwoman": 5}
    if face_confidence < 0.4:
        return {"egenman": 20, "egenwoman": 20}
    return {}


def edge_points(edge_detection: int) -> Points:
    """Sharp photos lean teto, soft ones egen; the middle band scores nothing."""
    if edge_detection > 12000:
        return {"tetoman": 15, "tetowoman": 15}
    if edge_detection < 6000:
        return {"egenman": 15, "egenwoman": 15}
    return {}


def quality_points(image_quality: ImageQuality) -> Points:
    if image_quality == "high":
        return {"egenman": 15, "egenwoman": 15, "tetoman": 10, "tetowoman": 10}
    if image_quality == "low":
        return {"tetoman": 10, "tetowoman": 5}
    return {}
