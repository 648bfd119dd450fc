"""Band-selection skeleton shared by every MPE and AEL table.

A limit table is an ordered sequence of wavelength regions, each an
ordered sequence of exposure-time rows, each holding one formula. Both
levels are half-open interval predicates checked for overlap when the
table is built, so adding a region can never shadow an existing one.

Formulas are small closures built from the term constructors below:
``constant``, ``power_law``, ``threshold_split`` and ``dual_limit``. They
receive the correction factors and the exposure time and return a
``LimitTerm`` that records both the value and the formula that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from lasersafety.domain.value_objects import PhysicalQuantity, Unit

from .constants import MAX_EXPOSURE_TIME_S, MIN_EXPOSURE_TIME_S
from .units import normalize_to_energy

if TYPE_CHECKING:
    from .correction_factors import CorrectionFactorSet


@dataclass(frozen=True)
class Band:
    """Interval on the wavelength or exposure-time axis.

    Attributes:
        lower: Lower edge.
        upper: Upper edge.
        lower_inclusive: Whether ``lower`` itself belongs to the band.
        upper_inclusive: Whether ``upper`` itself belongs to the band.
    """

    lower: float
    upper: float
    lower_inclusive: bool = True
    upper_inclusive: bool = False

    def __post_init__(self) -> None:
        if self.upper < self.lower:
            raise ValueError(f"band upper {self.upper} is below lower {self.lower}")

    def contains(self, x: float) -> bool:
        above = x >= self.lower if self.lower_inclusive else x > self.lower
        below = x <= self.upper if self.upper_inclusive else x < self.upper
        return above and below

    def precedes(self, other: Band) -> bool:
        """Check that this band ends before ``other`` starts, without overlap."""
        if self.upper < other.lower:
            return True
        if self.upper == other.lower:
            return not (self.upper_inclusive and other.lower_inclusive)
        return False

    @property
    def label(self) -> str:
        left = "[" if self.lower_inclusive else "("
        right = "]" if self.upper_inclusive else ")"
        return f"{left}{self.lower:g}, {self.upper:g}{right}"


@dataclass(frozen=True)
class LimitTerm:
    """One evaluated formula.

    Attributes:
        quantity: Resulting limit.
        formula: Formula text with symbols (e.g. "18*t^0.75*C6 J/m2").
        mechanism: Damage mechanism the formula protects against, if known.
        notes: Extra derivation lines (dual-limit comparisons, splits).
    """

    quantity: PhysicalQuantity
    formula: str
    mechanism: str = ""
    notes: tuple[str, ...] = ()


Formula = Callable[["CorrectionFactorSet", float], LimitTerm]


# ==============================================================================
# Term constructors
# ==============================================================================


def _factor_product(factors: CorrectionFactorSet, names: tuple[str, ...]) -> float:
    product = 1.0
    for name in names:
        product *= getattr(factors, name.lower())
    return product


def _symbols(names: tuple[str, ...]) -> str:
    return "".join(f"*{name}" for name in names)


def constant(k: float, unit: Unit, *factor_names: str, mechanism: str = "") -> Formula:
    """Formula ``k * factors`` independent of time."""

    def formula(factors: CorrectionFactorSet, t: float) -> LimitTerm:
        value = k * _factor_product(factors, factor_names)
        return LimitTerm(
            quantity=PhysicalQuantity(value, unit),
            formula=f"{k:g}{_symbols(factor_names)} {unit.value}",
            mechanism=mechanism,
        )

    return formula


def power_law(
    k: float, p: float, unit: Unit, *factor_names: str, mechanism: str = ""
) -> Formula:
    """Formula ``k * t^p * factors``."""

    def formula(factors: CorrectionFactorSet, t: float) -> LimitTerm:
        value = k * t**p * _factor_product(factors, factor_names)
        exponent = "" if p == 1 else f"^{p:g}"
        return LimitTerm(
            quantity=PhysicalQuantity(value, unit),
            formula=f"{k:g}*t{exponent}{_symbols(factor_names)} {unit.value}",
            mechanism=mechanism,
        )

    return formula


def factor_power(
    k: float,
    base: str,
    p: float,
    unit: Unit,
    *factor_names: str,
    mechanism: str = "",
) -> Formula:
    """Formula ``k * base^p * factors`` where ``base`` is a factor (e.g. T2)."""

    def formula(factors: CorrectionFactorSet, t: float) -> LimitTerm:
        base_value = getattr(factors, base.lower())
        value = k * base_value**p * _factor_product(factors, factor_names)
        return LimitTerm(
            quantity=PhysicalQuantity(value, unit),
            formula=f"{k:g}*{base}^{p:g}{_symbols(factor_names)} {unit.value}",
            mechanism=mechanism,
        )

    return formula


def threshold_split(
    threshold: Callable[[CorrectionFactorSet], float],
    symbol: str,
    below: Formula,
    above: Formula,
    inclusive: bool = True,
) -> Formula:
    """Pick ``below`` while t is under a factor-dependent threshold.

    Args:
        threshold: Computes the threshold time from the correction factors.
        symbol: Name of the threshold for the trace (e.g. "T2").
        below: Formula used when t is below (or at, if inclusive) the threshold.
        above: Formula used otherwise.
        inclusive: Whether t equal to the threshold uses ``below``.
    """

    def formula(factors: CorrectionFactorSet, t: float) -> LimitTerm:
        limit = threshold(factors)
        is_below = t <= limit if inclusive else t < limit
        chosen = (below if is_below else above)(factors, t)
        relation = ("<=" if inclusive else "<") if is_below else (">" if inclusive else ">=")
        note = f"t = {t:g} s {relation} {symbol} = {limit:g} s"
        return LimitTerm(
            quantity=chosen.quantity,
            formula=chosen.formula,
            mechanism=chosen.mechanism,
            notes=(note, *chosen.notes),
        )

    return formula


def minimum_after_normalizing(
    first: LimitTerm, second: LimitTerm, duration_s: float
) -> LimitTerm:
    """Return the more restrictive of two competing limits.

    Both terms are brought to one energy unit over ``duration_s`` before
    their magnitudes are compared. The winner keeps its own unit. On a tie
    the first term wins.

    Raises:
        UnitMismatchError: If the terms cannot be put in one unit.
    """
    left, right = normalize_to_energy(first.quantity, second.quantity, duration_s)
    winner = first if left.value <= right.value else second
    comparison = (
        f"dual limit: {first.mechanism or 'first'} {left.formatted} vs "
        f"{second.mechanism or 'second'} {right.formatted} -> "
        f"{winner.mechanism or 'first'} applies"
    )
    return LimitTerm(
        quantity=winner.quantity,
        formula=winner.formula,
        mechanism=winner.mechanism,
        notes=(*first.notes, *second.notes, comparison),
    )


def dual_limit(first: Formula, second: Formula) -> Formula:
    """Formula taking the minimum of two mechanisms at the same time."""

    def formula(factors: CorrectionFactorSet, t: float) -> LimitTerm:
        return minimum_after_normalizing(first(factors, t), second(factors, t), t)

    return formula


# ==============================================================================
# Table structure
# ==============================================================================


@dataclass(frozen=True)
class TimeRow:
    """Exposure-time band with its formula."""

    band: Band
    formula: Formula


def _check_ordered(bands: list[Band], what: str) -> None:
    for current, following in zip(bands, bands[1:]):
        if not current.precedes(following):
            raise ValueError(f"{what} {current.label} overlaps or follows {following.label}")


@dataclass(frozen=True)
class WavelengthRegion:
    """Wavelength band with its ordered exposure-time rows."""

    band: Band
    rows: tuple[TimeRow, ...]

    def __post_init__(self) -> None:
        if not self.rows:
            raise ValueError(f"region {self.band.label} has no time rows")
        _check_ordered([row.band for row in self.rows], "time band")

    def row_for(self, exposure_time_s: float) -> TimeRow | None:
        for row in self.rows:
            if row.band.contains(exposure_time_s):
                return row
        return None


@dataclass(frozen=True)
class LimitTable:
    """Named, ordered set of wavelength regions.

    Attributes:
        name: Table name used in traces.
        regions: Regions in ascending wavelength order.
    """

    name: str
    regions: tuple[WavelengthRegion, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _check_ordered([region.band for region in self.regions], "wavelength band")

    def region_for(self, wavelength_nm: float) -> WavelengthRegion | None:
        for region in self.regions:
            if region.band.contains(wavelength_nm):
                return region
        return None


def time_rows(*steps: tuple) -> tuple[TimeRow, ...]:
    """Build contiguous time rows from successive upper edges.

    Each step is ``(upper, formula)`` or ``(upper, formula, closed)``. Rows
    start at the shortest tabulated exposure; an upper edge of ``None``
    closes the row at the longest tabulated exposure. A closed upper edge
    makes the next row open at that edge.

    Example:
        time_rows((1e-9, constant(3e10, Unit.WATT_PER_M2)),
                  (None, constant(30, Unit.JOULE_PER_M2)))
    """
    rows: list[TimeRow] = []
    lower, lower_inclusive = MIN_EXPOSURE_TIME_S, True
    for step in steps:
        upper, formula, *rest = step
        closed = bool(rest and rest[0])
        if upper is None:
            upper, closed = MAX_EXPOSURE_TIME_S, True
        rows.append(TimeRow(Band(lower, upper, lower_inclusive, closed), formula))
        lower, lower_inclusive = upper, not closed
    return tuple(rows)


def region(
    lower: float,
    upper: float,
    rows: tuple[TimeRow, ...],
    lower_inclusive: bool = True,
    upper_inclusive: bool = False,
) -> WavelengthRegion:
    """Shorthand for a WavelengthRegion on ``lower``-``upper`` nm."""
    return WavelengthRegion(Band(lower, upper, lower_inclusive, upper_inclusive), rows)
