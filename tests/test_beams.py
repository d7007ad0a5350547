# File: tests/test_beams.py
"""
Test the beams.py module (cross-section geometry and genetic operators).

WHY THESE TESTS?
---------------
1. The closed-form section formulas are the foundation of every score
2. Monotonicity catches sign errors in the cut-out terms
3. Genetic operators must never touch the fixed parameters
4. Nonsense geometry must construct fine and show up as an invalid section
"""

import math

import numpy as np
import pytest

from beam_ga.beams import BEAM_TYPES, IBeam, RectBeam, TBeam, Topology
from beam_ga.catalog import MATERIALS, MaterialTag
from beam_ga.config import SearchConfig


STEEL = MATERIALS[MaterialTag.STEEL_1018]


def test_rect_beam_reference_scenario():
    """
    RectBeam W=30, H=34, t=3, L=1257 in Steel 1018 matches the hollow
    rectangle closed forms:

        area   = W·H - (W-2t)(H-2t) = 1020 - 672 = 348
        weight = area · L · density
        cost   = weight · unit_cost
    """
    beam = RectBeam(material=STEEL, length=1257.0, width=30.0, height=34.0, thickness=3.0)

    area = 30.0 * 34.0 - (30.0 - 6.0) * (34.0 - 6.0)
    weight = area * 1257.0 * 0.284
    cost = weight * 1.09

    assert area == 348.0
    assert beam.area() == pytest.approx(area, rel=1e-6)
    assert beam.weight() == pytest.approx(weight, rel=1e-6)
    assert beam.weight() == pytest.approx(124231.824, rel=1e-6)
    assert beam.cost() == pytest.approx(cost, rel=1e-6)
    assert beam.cost() == pytest.approx(135412.68816, rel=1e-6)

    ix = 30.0 * 34.0 ** 3 / 12.0 - 24.0 * 28.0 ** 3 / 12.0
    iy = 34.0 * 30.0 ** 3 / 12.0 - 28.0 * 24.0 ** 3 / 12.0
    assert beam.ix() == pytest.approx(ix, rel=1e-12)
    assert beam.iy() == pytest.approx(iy, rel=1e-12)
    assert beam.x_bend() == 15.0
    assert beam.y_bend() == -17.0

    print(f"✓ RectBeam scenario: area={beam.area()}, weight={beam.weight():.3f}")


def test_tee_centroid_within_section():
    """
    The Tee centroid (measured down from the flange top) must lie inside
    the section and move toward the flange as the flange gets heavier.
    """
    thin = TBeam(STEEL, 1257.0, 30.0, 34.0, stem_thickness=4.0, flange_thickness=4.0)
    thick = TBeam(STEEL, 1257.0, 30.0, 34.0, stem_thickness=4.0, flange_thickness=10.0)

    for beam in (thin, thick):
        assert -beam.height < beam.y_bend() < 0.0

    # Heavier flange pulls the centroid up (closer to 0)
    assert thick.y_bend() > thin.y_bend()


def test_tee_reduces_to_rectangle():
    """
    A Tee whose stem is as wide as the flange is a solid W×H rectangle:
    centroid at mid-height and ix = W·H³/12.
    """
    beam = TBeam(STEEL, 1257.0, 30.0, 34.0, stem_thickness=30.0, flange_thickness=5.0)
    assert beam.area() == pytest.approx(30.0 * 34.0)
    assert beam.y_bend() == pytest.approx(-17.0)
    assert beam.ix() == pytest.approx(30.0 * 34.0 ** 3 / 12.0, rel=1e-12)


def test_ibeam_symmetric_and_solid_limit():
    beam = IBeam(STEEL, 1257.0, 30.0, 34.0, web_thickness=4.0, flange_thickness=5.0)
    assert beam.y_bend() == -17.0
    assert beam.area() == 2 * 30.0 * 5.0 + 4.0 * 24.0

    solid = IBeam(STEEL, 1257.0, 30.0, 34.0, web_thickness=30.0, flange_thickness=5.0)
    assert solid.ix() == pytest.approx(30.0 * 34.0 ** 3 / 12.0, rel=1e-12)


@pytest.mark.parametrize("beam_type, base, parameter, values", [
    (RectBeam, dict(width=30.0, height=34.0, thickness=3.0), "thickness",
     np.linspace(3.0, 15.0, 13)),
    (TBeam, dict(width=30.0, height=34.0, stem_thickness=4.0, flange_thickness=4.0),
     "stem_thickness", np.linspace(3.0, 15.0, 13)),
    (TBeam, dict(width=30.0, height=34.0, stem_thickness=4.0, flange_thickness=4.0),
     "flange_thickness", np.linspace(3.4, 15.0, 13)),
    (IBeam, dict(width=30.0, height=34.0, web_thickness=4.0, flange_thickness=5.0),
     "web_thickness", np.linspace(3.0, 30.0, 13)),
    (IBeam, dict(width=30.0, height=34.0, web_thickness=4.0, flange_thickness=5.0),
     "flange_thickness", np.linspace(3.4, 17.0, 13)),
])
def test_area_weight_cost_monotone_in_thickness(beam_type, base, parameter, values):
    """
    Thickening any wall (all else fixed) never reduces area, weight or cost
    over the physically meaningful range.
    """
    previous = None
    for v in values:
        kwargs = dict(base)
        kwargs[parameter] = float(v)
        beam = beam_type(material=STEEL, length=1257.0, **kwargs)
        current = (beam.area(), beam.weight(), beam.cost())
        if previous is not None:
            for now, before in zip(current, previous):
                assert now >= before, f"{beam_type.__name__}.{parameter}={v} decreased"
        previous = current


def test_constructors_accept_nonsense_geometry():
    """
    Negative or zero dimensions construct fine; they only produce an
    invalid section.
    """
    flat = RectBeam(STEEL, 1257.0, width=0.0, height=0.0, thickness=0.0)
    section = flat.section()
    assert section.ix == 0.0
    assert not section.is_valid

    empty_tee = TBeam(STEEL, 1257.0, 0.0, 34.0, stem_thickness=0.0, flange_thickness=0.0)
    assert math.isnan(empty_tee.y_bend())
    assert not empty_tee.section().is_valid

    # Negative wall: the "cut-out" is bigger than the box
    negative = RectBeam(STEEL, 1257.0, width=30.0, height=34.0, thickness=-1.0)
    assert negative.ix() < 0.0
    assert not negative.section().is_valid

    huge = RectBeam(STEEL, 1257.0, width=1e200, height=1e200, thickness=1.0)
    assert not huge.section().is_valid


def test_valid_section():
    beam = IBeam(STEEL, 1257.0, 30.0, 34.0, web_thickness=4.0, flange_thickness=5.0)
    assert beam.section().is_valid


def test_crossover_averages_free_parameters():
    a = TBeam(STEEL, 1257.0, 30.0, 34.0, stem_thickness=4.0, flange_thickness=6.0)
    b = TBeam(MATERIALS[MaterialTag.ALUMINUM_6061_T6], 1257.0, 24.0, 34.0,
              stem_thickness=8.0, flange_thickness=2.0)
    child = a.crossover(b)

    assert child.width == 27.0
    assert child.stem_thickness == 6.0
    assert child.flange_thickness == 4.0
    # Material and fixed geometry come from the first parent
    assert child.material is STEEL
    assert child.length == 1257.0 and child.height == 34.0


@pytest.mark.parametrize("beam_type", [RectBeam, TBeam, IBeam])
def test_mutation_stays_within_step_and_keeps_fixed(beam_type):
    """
    Each free parameter moves by at most half its mutation range; length,
    height and material never change.
    """
    config = SearchConfig()
    rng = np.random.default_rng(7)
    parent = beam_type.sample(rng, STEEL, config)
    ranges = beam_type.mutation_ranges(config)

    for _ in range(200):
        child = parent.mutate(rng, config)
        assert child.material is parent.material
        assert child.length == parent.length
        assert child.height == parent.height
        for name, step in ranges.items():
            assert abs(getattr(child, name) - getattr(parent, name)) <= step / 2.0 + 1e-12


def test_mutation_step_sizes():
    """Rect uses a divisor of 10, Tee and I a divisor of 20."""
    config = SearchConfig(width_min=22.0, width_max=38.0)
    assert RectBeam.mutation_ranges(config) == pytest.approx({"width": 0.8, "thickness": 0.08})
    assert TBeam.mutation_ranges(config) == pytest.approx(
        {"width": 0.4, "stem_thickness": 0.04, "flange_thickness": 0.04}
    )
    assert IBeam.mutation_ranges(config) == pytest.approx(
        {"width": 0.4, "web_thickness": 0.04, "flange_thickness": 0.04}
    )


@pytest.mark.parametrize("topology", list(Topology))
def test_sampling_within_bounds(topology):
    config = SearchConfig()
    rng = np.random.default_rng(3)
    beam_type = BEAM_TYPES[topology]
    for _ in range(100):
        beam = beam_type.sample(rng, STEEL, config)
        assert beam.topology is topology
        assert beam.length == config.design_length
        assert beam.height == config.design_height
        assert config.width_min <= beam.width < config.width_max


def test_shape_ratio_rules():
    ok = RectBeam(STEEL, 1257.0, 30.0, 34.0, thickness=5.0)
    too_thin = RectBeam(STEEL, 1257.0, 30.0, 34.0, thickness=2.0)
    too_thick = RectBeam(STEEL, 1257.0, 30.0, 34.0, thickness=16.0)
    assert ok.shape_ok()
    assert not too_thin.shape_ok()
    assert not too_thick.shape_ok()

    # The I-beam web may be as wide as the flange
    wide_web = IBeam(STEEL, 1257.0, 30.0, 34.0, web_thickness=30.0, flange_thickness=5.0)
    assert wide_web.shape_ok()

    tee_flange_too_thin = TBeam(STEEL, 1257.0, 30.0, 34.0, stem_thickness=4.0, flange_thickness=3.0)
    assert not tee_flange_too_thin.shape_ok()


def test_geometry_excludes_material():
    beam = IBeam(STEEL, 1257.0, 30.0, 34.0, web_thickness=4.0, flange_thickness=5.0)
    assert beam.geometry() == {
        "length": 1257.0, "width": 30.0, "height": 34.0,
        "web_thickness": 4.0, "flange_thickness": 5.0,
    }
