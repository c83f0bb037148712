"""
Point Source Field Tests
========================

Superposition, attenuation, grid buffers and colour classification.

Main invariants:
- Linearity: field({A, B}) = field({A}) + field({B})
- Attenuation: amplitude non-increasing in distance, constant at 0
- Purity: repeated evaluation is bit-identical
- Cached grid evaluation equals the pure evaluation

Run: python -m pytest tests/waves/test_field.py -v

Oct 2026
"""

import numpy as np
import pytest

from wavefield.constants import BELOW_THRESHOLD, GRADIENT, UNDEFINED
from wavefield.field import (
    FieldGrid,
    PointSourceField,
    WaveSource,
    attenuated_amplitude,
    classify_colors,
    sample_line,
    source_displacement,
    two_source_layout,
)


# =============================================================================
# F1: Superposition
# =============================================================================

@pytest.mark.parametrize("t", [0.0, 0.37, 2.9])
def test_linearity_two_sources(source_pair, random_points, t):
    """F1.1: field({A,B}) == field({A}) + field({B})."""
    a, b = source_pair
    both = PointSourceField([a, b], attenuation=20.0, angular_speed=2.0)
    only_a = PointSourceField([a], attenuation=20.0, angular_speed=2.0)
    only_b = PointSourceField([b], attenuation=20.0, angular_speed=2.0)

    np.testing.assert_allclose(
        both.evaluate(random_points, t),
        only_a.evaluate(random_points, t) + only_b.evaluate(random_points, t),
        atol=1e-12,
    )


def test_superposition_is_not_two_source_specific(random_points, off_axis_source):
    """F1.2: three sources sum exactly like two."""
    sources = list(two_source_layout(12.0, 1.5, phase_shift=0.8)) + [off_axis_source]
    field = PointSourceField(sources, attenuation=5.0, angular_speed=1.3)

    expected = sum(source_displacement(s, random_points, 0.6, 5.0, 1.3) for s in sources)
    np.testing.assert_allclose(field.evaluate(random_points, 0.6), expected, atol=1e-12)


def test_single_source_formula(off_axis_source):
    """F1.3: y = A·exp(-d·att/300)·sin(d/T - ωt + φ)."""
    s = off_axis_source
    p = np.array([10.0, 4.0])
    d = np.hypot(10.0 - 3.0, 4.0 + 7.5)
    expected = 1.3 * np.exp(-d * 40.0 / 300.0) * np.sin(d / 0.7 - 2.0 * 1.2 + 1.1)
    assert float(source_displacement(s, p, 1.2, 40.0, 2.0)) == pytest.approx(expected)


def test_evaluation_is_pure(source_pair, random_points):
    """F1.4: same inputs, same output; nothing accumulates."""
    field = PointSourceField(source_pair, attenuation=20.0, angular_speed=2.0)
    first = field.evaluate(random_points, 1.7)
    field.evaluate(random_points, 0.2)
    second = field.evaluate(random_points, 1.7)
    assert np.array_equal(first, second)


def test_no_sources_gives_flat_field(random_points):
    field = PointSourceField([], attenuation=10.0)
    assert np.all(field.evaluate(random_points, 0.5) == 0.0)

    grid = FieldGrid(4)
    grid.bind(field)
    grid.update(0.5)
    assert np.all(grid.displacement == 0.0)


def test_two_source_layout(source_pair):
    a, b = two_source_layout(20.0, 1.0, phase_shift=np.pi / 2)
    assert a.position == (10.0, 0.0)
    assert b.position == (-10.0, 0.0)
    assert a.phase_offset == 0.0
    assert b.phase_offset == pytest.approx(np.pi / 2)
    assert a.base_amplitude == 2.0


def test_zero_period_source_rejected():
    """F1.5: a zero period never reaches the evaluator."""
    with pytest.raises(ValueError, match="period"):
        WaveSource((0.0, 0.0), period=0.0)


# =============================================================================
# F2: Attenuation
# =============================================================================

@pytest.mark.parametrize("attenuation", [1.0, 20.0, 100.0])
def test_attenuation_monotone(attenuation):
    """F2.1: d1 < d2 implies amplitude(d1) >= amplitude(d2)."""
    d = np.linspace(0.0, 100.0, 501)
    amp = attenuated_amplitude(d, 2.0, attenuation)
    assert np.all(np.diff(amp) <= 0.0)
    assert amp[0] == pytest.approx(2.0)


def test_zero_attenuation_is_constant():
    """F2.2: attenuation = 0 keeps the base amplitude at every distance."""
    d = np.array([0.0, 1e-12, 1.0, 1e3, 1e8])
    amp = attenuated_amplitude(d, 2.0, 0.0)
    assert np.all(amp == 2.0)
    assert np.all(np.isfinite(amp))


def test_displacement_at_source_is_finite(source_pair):
    """F2.3: d = 0 needs no special case."""
    a, _ = source_pair
    y = source_displacement(a, np.array(a.position), 0.25, 20.0, 2.0)
    assert float(y) == pytest.approx(2.0 * np.sin(-0.5))


# =============================================================================
# F3: Grid buffers
# =============================================================================

def test_grid_layout():
    """F3.1: (resolution+1)² samples spanning [-extent/2, extent/2]²."""
    grid = FieldGrid(10, extent=70.0)
    assert grid.sample_count == 121
    assert grid.shape == (11, 11)
    assert grid.points[:, 0].min() == pytest.approx(-35.0)
    assert grid.points[:, 1].max() == pytest.approx(35.0)


@pytest.mark.parametrize("t", [0.0, 0.8, 2.2])
def test_cached_grid_matches_pure_evaluation(source_pair, t):
    """F3.2: the spatially memoised tick gives the uncached answer."""
    field = PointSourceField(source_pair, attenuation=20.0, angular_speed=2.0)
    grid = FieldGrid(30)
    grid.bind(field)
    grid.update(t)
    np.testing.assert_allclose(grid.displacement, field.evaluate(grid.points, t), atol=1e-12)
    assert np.all(grid.defined)


def test_grid_buffers_are_reused(source_pair):
    """F3.3: update() overwrites the same memory every tick."""
    field = PointSourceField(source_pair, attenuation=20.0, angular_speed=2.0)
    grid = FieldGrid(16)
    grid.bind(field)
    grid.update(0.1)
    before = grid.displacement
    colors_before = grid.colors
    snapshot = before.copy()

    grid.update(0.6)
    assert np.shares_memory(before, grid.displacement)
    assert np.shares_memory(colors_before, grid.colors)
    assert not np.array_equal(snapshot, grid.displacement)

    grid.resize(16)
    assert np.shares_memory(before, grid.displacement)


def test_grid_views_are_read_only(source_pair):
    """F3.4: renderers get read-only views."""
    grid = FieldGrid(4)
    grid.bind(PointSourceField(source_pair))
    grid.update(0.0)
    for view in (grid.displacement, grid.colors, grid.category, grid.defined, grid.points):
        assert not view.flags.writeable
    with pytest.raises(ValueError):
        grid.displacement[0] = 1.0


def test_grid_resize_rebinds(source_pair):
    """F3.5: a new resolution reallocates and refreshes the cache."""
    field = PointSourceField(source_pair, attenuation=20.0, angular_speed=2.0)
    grid = FieldGrid(8)
    grid.bind(field)
    grid.resize(12)
    grid.update(0.4)
    assert grid.sample_count == 169
    np.testing.assert_allclose(grid.displacement, field.evaluate(grid.points, 0.4), atol=1e-12)


def test_update_before_bind_raises():
    with pytest.raises(RuntimeError, match="bind"):
        FieldGrid(4).update(0.0)


# =============================================================================
# F4: Colour classification
# =============================================================================

def test_color_classes():
    """F4.1: below threshold -> black, else (v, 0.5, 1-v), v = (Y+2)/4."""
    y = np.array([0.0, 0.05, 1.0, -2.0, 3.0])
    colors, category = classify_colors(y, black_threshold=0.1)

    assert list(category) == [BELOW_THRESHOLD, BELOW_THRESHOLD, GRADIENT, GRADIENT, GRADIENT]
    np.testing.assert_allclose(colors[0], [0.0, 0.0, 0.0])
    np.testing.assert_allclose(colors[2], [0.75, 0.5, 0.25])
    np.testing.assert_allclose(colors[3], [0.0, 0.5, 1.0])
    np.testing.assert_allclose(colors[4], [1.0, 0.5, 0.0])


def test_zero_threshold_disables_black():
    y = np.array([0.0, -0.0, 1e-9])
    _, category = classify_colors(y, black_threshold=0.0)
    assert np.all(category == GRADIENT)


def test_undefined_samples_are_flagged():
    """F4.2: undefined samples win over the threshold test."""
    y = np.array([0.0, 1.5, 0.0])
    defined = np.array([True, True, False])
    colors, category = classify_colors(y, 0.5, defined=defined)
    assert list(category) == [BELOW_THRESHOLD, GRADIENT, UNDEFINED]
    np.testing.assert_allclose(colors[2], [0.0, 0.0, 0.0])


def test_classification_writes_into_buffers():
    y = np.linspace(-2.0, 2.0, 9)
    colors = np.zeros((9, 3))
    category = np.zeros(9, dtype=np.int8)
    out_colors, out_category = classify_colors(y, 0.0, colors=colors, category=category)
    assert out_colors is colors
    assert out_category is category
    np.testing.assert_allclose(colors[:, 0] + colors[:, 2], 1.0)


# =============================================================================
# F5: Line sampling
# =============================================================================

def test_sample_line_endpoints(source_pair):
    """F5.1: the extracted wave runs from the source to the probe."""
    a, _ = source_pair
    points, y = sample_line(a, (-4.0, 6.0), 0.3, attenuation=20.0, angular_speed=2.0)
    assert points.shape == (101, 2)
    np.testing.assert_allclose(points[0], a.position)
    np.testing.assert_allclose(points[-1], [-4.0, 6.0])
    assert y[0] == pytest.approx(2.0 * np.sin(-0.6))
    np.testing.assert_allclose(y, source_displacement(a, points, 0.3, 20.0, 2.0))
