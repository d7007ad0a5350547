# beam_ga/beams.py
"""
BEAMS: CROSS-SECTION GENOMES
============================

PURPOSE:
--------
Each candidate design is a small frozen dataclass describing one beam:
its material, its fixed length and height, and the free geometry parameters
the genetic search evolves (width plus one or two thicknesses).

THREE TOPOLOGIES:
-----------------
    Rectangular (hollow box)    Tee (flange over stem)     I (two flanges + web)

    ┌──────────┐                ┌──────────┐               ┌──────────┐
    │ ┌──────┐ │                └───┐  ┌───┘               └───┐  ┌───┘
    │ │      │ │                    │  │                       │  │
    │ └──────┘ │                    │  │                   ┌───┘  └───┐
    └──────────┘                    └──┘                   └──────────┘

All three share one capability set (area, second moments, neutral-axis
offsets, weight, cost). Generic consumers only use that set. The parts that
are inherently per-topology stay on the variant:
- shape-ratio limits (thickness relative to width/height)
- random sampling of the initial population
- mutation step sizing

NUMERICS:
---------
Formulas run on numpy float64 scalars with floating point errors silenced, so
degenerate geometry (zero area, negative thickness, overflow) produces
inf/nan instead of raising. Constructors never validate geometry: an
infeasible beam is simply a beam that scores badly.
"""

import functools
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import ClassVar, Dict, Tuple

import numpy as np

from .catalog import Material


class Topology(Enum):
    """The three fixed cross-section shapes."""
    RECTANGULAR = "rectangular"
    TEE = "tee"
    I = "i"


def _ieee(func):
    """Evaluate with IEEE semantics (inf/nan instead of exceptions) and return a float."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with np.errstate(all="ignore"):
            return float(func(*args, **kwargs))
    return wrapper


def _f64(*values):
    return tuple(np.float64(v) for v in values)


@dataclass(frozen=True)
class DerivedSection:
    """
    Cross-section properties derived from a genome's geometry.

    ix is the second moment governing vertical bending, iy the one governing
    horizontal bending. x_bend / y_bend are the extreme-fiber offsets from the
    neutral axes used in the stress formulas.
    """
    area: float
    ix: float
    iy: float
    x_bend: float
    y_bend: float

    @property
    def is_valid(self) -> bool:
        """False for non-finite properties or non-positive area or second moments."""
        values = (self.area, self.ix, self.iy, self.x_bend, self.y_bend)
        if not all(np.isfinite(v) for v in values):
            return False
        return self.area > 0.0 and self.ix > 0.0 and self.iy > 0.0


class BeamGenome:
    """
    Shared capability interface of the three beam variants.

    Subclasses are frozen dataclasses that declare `material`, `length`,
    `width`, `height` and their thickness fields, and set the class-level
    `topology`, `free_parameters` and `mutation_divisor`.
    """

    topology: ClassVar[Topology]
    free_parameters: ClassVar[Tuple[str, ...]]
    mutation_divisor: ClassVar[float]

    # -- geometry ----------------------------------------------------------

    def area(self) -> float:
        raise NotImplementedError

    def ix(self) -> float:
        raise NotImplementedError

    def iy(self) -> float:
        raise NotImplementedError

    @_ieee
    def x_bend(self) -> float:
        return np.float64(self.width) / 2.0

    @_ieee
    def y_bend(self) -> float:
        return -np.float64(self.height) / 2.0

    def section(self) -> DerivedSection:
        """Recompute every derived section property."""
        return DerivedSection(
            area=self.area(),
            ix=self.ix(),
            iy=self.iy(),
            x_bend=self.x_bend(),
            y_bend=self.y_bend(),
        )

    @_ieee
    def weight(self) -> float:
        volume = np.float64(self.area()) * self.length
        return volume * self.material.density

    @_ieee
    def cost(self) -> float:
        return np.float64(self.weight()) * self.material.unit_cost

    def dimensions_ok(self) -> bool:
        """Every geometry field (length included) finite and strictly positive."""
        return all(np.isfinite(v) and v > 0.0 for v in self.geometry().values())

    # -- per-topology rules --------------------------------------------------

    def shape_ok(self) -> bool:
        """Shape-ratio limits on thickness relative to width and height."""
        raise NotImplementedError

    @classmethod
    def sample(cls, rng: np.random.Generator, material: Material, config) -> "BeamGenome":
        """Draw one random genome for the initial population."""
        raise NotImplementedError

    @classmethod
    def mutation_ranges(cls, config) -> Dict[str, float]:
        """
        Full width of the uniform mutation offset for each free parameter.

        Offsets are drawn from [-range/2, range/2). Width uses half the
        configured width span, thicknesses a tenth of that, both divided by
        the topology's mutation divisor.
        """
        width_amp = (config.width_max - config.width_min) / 2.0
        thickness_amp = width_amp * 0.1
        return {
            name: (width_amp if name == "width" else thickness_amp) / cls.mutation_divisor
            for name in cls.free_parameters
        }

    # -- genetic operators ---------------------------------------------------

    def crossover(self, other: "BeamGenome") -> "BeamGenome":
        """Arithmetic mean of every free parameter; everything else from self."""
        means = {
            name: (getattr(self, name) + getattr(other, name)) / 2.0
            for name in self.free_parameters
        }
        return replace(self, **means)

    def mutate(self, rng: np.random.Generator, config) -> "BeamGenome":
        """Perturb each free parameter by a uniform offset; fixed ones untouched."""
        changes = {
            name: float(getattr(self, name) + (rng.random() - 0.5) * step)
            for name, step in self.mutation_ranges(config).items()
        }
        return replace(self, **changes)

    # -- reporting -----------------------------------------------------------

    def geometry(self) -> Dict[str, float]:
        """All geometry fields (fixed and free) by name."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "material"}


@dataclass(frozen=True)
class RectBeam(BeamGenome):
    """Hollow rectangular box with uniform wall thickness."""
    material: Material
    length: float
    width: float
    height: float
    thickness: float

    topology: ClassVar[Topology] = Topology.RECTANGULAR
    free_parameters: ClassVar[Tuple[str, ...]] = ("width", "thickness")
    mutation_divisor: ClassVar[float] = 10.0

    @_ieee
    def area(self) -> float:
        w, h, t = _f64(self.width, self.height, self.thickness)
        inner_area = (w - 2.0 * t) * (h - 2.0 * t)
        return (w * h) - inner_area

    @_ieee
    def ix(self) -> float:
        w, h, t = _f64(self.width, self.height, self.thickness)
        ix_outer = w * h ** 3.0 / 12.0
        ix_inner = (w - 2.0 * t) * (h - 2.0 * t) ** 3.0 / 12.0
        return ix_outer - ix_inner

    @_ieee
    def iy(self) -> float:
        w, h, t = _f64(self.width, self.height, self.thickness)
        iy_outer = h * w ** 3.0 / 12.0
        iy_inner = (h - 2.0 * t) * (w - 2.0 * t) ** 3.0 / 12.0
        return iy_outer - iy_inner

    def shape_ok(self) -> bool:
        t = self.thickness
        return (
            t >= 0.1 * self.width
            and t >= 0.1 * self.height
            and t <= 0.5 * self.height
            and t <= 0.5 * self.width
        )

    @classmethod
    def sample(cls, rng, material, config):
        span = config.width_max - config.width_min
        return cls(
            material=material,
            length=config.design_length,
            height=config.design_height,
            width=float(rng.random() * span + config.width_min),
            thickness=float((rng.random() * span + config.width_min) / 10.0),
        )


@dataclass(frozen=True)
class TBeam(BeamGenome):
    """Flange over a stem; the centroid depends on the geometry."""
    material: Material
    length: float
    width: float
    height: float
    stem_thickness: float
    flange_thickness: float

    topology: ClassVar[Topology] = Topology.TEE
    free_parameters: ClassVar[Tuple[str, ...]] = ("width", "stem_thickness", "flange_thickness")
    mutation_divisor: ClassVar[float] = 20.0

    @_ieee
    def area(self) -> float:
        w, h, ts, tf = _f64(self.width, self.height, self.stem_thickness, self.flange_thickness)
        return w * tf + (h - tf) * ts

    @_ieee
    def y_bend(self) -> float:
        # Centroid measured down from the top of the flange
        w, h, ts, tf = _f64(self.width, self.height, self.stem_thickness, self.flange_thickness)
        weighted_stem = (tf + (h - tf) / 2.0) * ts * (h - tf)
        weighted_flange = (tf / 2.0) * (tf * w)
        return -(weighted_stem + weighted_flange) / np.float64(self.area())

    @_ieee
    def ix(self) -> float:
        w, h, ts, tf = _f64(self.width, self.height, self.stem_thickness, self.flange_thickness)
        y = np.float64(self.y_bend())
        ix_stem = ts * (h - tf) ** 3.0 / 12.0
        ix_flange = w * tf ** 3.0 / 12.0
        stem_offset = y + (h - tf) / 2.0 + tf
        flange_offset = tf / 2.0 + y
        stem_parallel = stem_offset ** 2.0 * (h - tf) * ts
        flange_parallel = flange_offset ** 2.0 * w * tf
        return ix_stem + ix_flange + stem_parallel + flange_parallel

    @_ieee
    def iy(self) -> float:
        w, h, ts, tf = _f64(self.width, self.height, self.stem_thickness, self.flange_thickness)
        iy_flange = w ** 3.0 * tf / 12.0
        iy_stem = ts ** 3.0 * (h - tf) / 12.0
        return iy_flange + iy_stem

    def shape_ok(self) -> bool:
        return (
            self.stem_thickness >= 0.1 * self.width
            and self.flange_thickness >= 0.1 * self.height
            and self.stem_thickness <= 0.5 * self.height
            and self.flange_thickness <= 0.5 * self.width
        )

    @classmethod
    def sample(cls, rng, material, config):
        span = config.width_max - config.width_min
        return cls(
            material=material,
            length=config.design_length,
            height=config.design_height,
            width=float(rng.random() * span + config.width_min),
            stem_thickness=float((rng.random() * span + config.width_min) / 10.0),
            flange_thickness=float((rng.random() * span + config.design_height) / 10.0),
        )


@dataclass(frozen=True)
class IBeam(BeamGenome):
    """Two flanges joined by a web; symmetric, so the centroid sits at mid-height."""
    material: Material
    length: float
    width: float
    height: float
    web_thickness: float
    flange_thickness: float

    topology: ClassVar[Topology] = Topology.I
    free_parameters: ClassVar[Tuple[str, ...]] = ("width", "web_thickness", "flange_thickness")
    mutation_divisor: ClassVar[float] = 20.0

    @_ieee
    def area(self) -> float:
        w, h, tw, tf = _f64(self.width, self.height, self.web_thickness, self.flange_thickness)
        return 2.0 * w * tf + tw * (h - 2.0 * tf)

    @_ieee
    def ix(self) -> float:
        # Outer rectangle minus the two side cut-outs beside the web
        w, h, tw, tf = _f64(self.width, self.height, self.web_thickness, self.flange_thickness)
        ix_cutout = (w - tw) / 2.0 * (h - 2.0 * tf) ** 3.0 / 12.0
        ix_outer = w * h ** 3.0 / 12.0
        return ix_outer - 2.0 * ix_cutout

    @_ieee
    def iy(self) -> float:
        w, h, tw, tf = _f64(self.width, self.height, self.web_thickness, self.flange_thickness)
        iy_flange = tf * w ** 3.0 / 12.0
        iy_web = (h - 2.0 * tf) * tw ** 3.0 / 12.0
        return iy_web + 2.0 * iy_flange

    def shape_ok(self) -> bool:
        return (
            self.web_thickness >= 0.1 * self.width
            and self.flange_thickness >= 0.1 * self.height
            and self.web_thickness <= self.width
            and self.flange_thickness <= 0.5 * self.height
        )

    @classmethod
    def sample(cls, rng, material, config):
        span = config.width_max - config.width_min
        return cls(
            material=material,
            length=config.design_length,
            height=config.design_height,
            width=float(rng.random() * span + config.width_min),
            web_thickness=float((rng.random() * span + config.width_min) / 10.0),
            flange_thickness=float((rng.random() * span + config.design_height) / 10.0),
        )


BEAM_TYPES = {
    Topology.RECTANGULAR: RectBeam,
    Topology.TEE: TBeam,
    Topology.I: IBeam,
}
