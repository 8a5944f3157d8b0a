"""Tests for the face confidence estimator."""

import pytest

from picpersona.confidence import calculate_face_confidence, is_face_detected


def test_ideal_portrait_reaches_full_confidence():
    assert calculate_face_confidence(0.18, True, 800) == 1.0


def test_components():
    # skin only, at the ideal ratio
    assert calculate_face_confidence(0.18, False, 0) == pytest.approx(0.4)
    # pattern only (ratio outside the window contributes nothing)
    assert calculate_face_confidence(0.05, True, 0) == pytest.approx(0.4)
    # edges only, half saturated
    assert calculate_face_confidence(0.0, False, 400) == pytest.approx(0.1)


def test_skin_falloff():
    # 0.1 away from ideal loses 0.15
    assert calculate_face_confidence(0.28, False, 0) == pytest.approx(0.25)
    # far enough away the skin term bottoms out at zero
    assert calculate_face_confidence(0.8, False, 0) == 0


def test_skin_window_is_inclusive_for_confidence():
    assert calculate_face_confidence(0.08, False, 0) == pytest.approx(0.4 - 0.1 * 1.5)
    assert calculate_face_confidence(0.0799, False, 0) == 0


def test_edges_saturate():
    assert calculate_face_confidence(0.0, False, 100_000) == pytest.approx(0.2)


@pytest.mark.parametrize("ratio", [0, 0.05, 0.08, 0.18, 0.5, 0.8, 0.85, 1])
@pytest.mark.parametrize("pattern", [True, False])
@pytest.mark.parametrize("edges", [0, 1, 800, 50_000])
def test_confidence_stays_in_unit_interval(ratio, pattern, edges):
    value = calculate_face_confidence(ratio, pattern, edges)
    assert 0.0 <= value <= 1.0


def test_face_detection_needs_every_condition():
    assert is_face_detected(0.18, True, 0.9)
    assert not is_face_detected(0.18, False, 0.9)
    assert not is_face_detected(0.18, True, 0.35)
    assert not is_face_detected(0.05, True, 0.9)
    assert not is_face_detected(0.85, True, 0.9)


def test_face_detection_window_is_exclusive():
    assert not is_face_detected(0.08, True, 0.9)
    assert not is_face_detected(0.8, True, 0.9)
    assert is_face_detected(0.0801, True, 0.9)
