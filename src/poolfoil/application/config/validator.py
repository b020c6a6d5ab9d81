"""Validation structures and advisory checks for foil plan configurations.

Pydantic handles structural validation. The checks here need the domain:
footprint placement inside the pool, overlap between stairs and splash
pool, and foil advisories such as deep walls or seams below the
manufacturer minimum. describe_config() summarises what the planner will
do with a configuration before any issue is listed.
"""

from dataclasses import dataclass, field
from typing import Any

from poolfoil.application.config.adapter import (
    config_to_material,
    config_to_pool,
    config_to_splash_pool,
    config_to_stairs,
)
from poolfoil.application.config.schema import FoilPlanConfiguration
from poolfoil.domain.services import (
    FootprintGenerator,
    placement_outline,
    pool_outline,
    validate_element_placement,
    wall_widths_for_depth,
)
from poolfoil.domain.value_objects import (
    DEEP_WALL_THRESHOLD,
    MIN_OVERLAP_BOTTOM,
    MIN_OVERLAP_WALL,
    FoilType,
    PlanStrategy,
    PoolShape,
    RollWidth,
)


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "stairs.corner_index")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None

    @property
    def section(self) -> str:
        """Top-level configuration section, e.g. "stairs"."""
        return self.path.split(".", 1)[0].split("[", 1)[0]


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None

    @property
    def section(self) -> str:
        """Top-level configuration section, e.g. "pool"."""
        return self.path.split(".", 1)[0].split("[", 1)[0]


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: List of blocking validation errors
        warnings: List of non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        """Check if the configuration has any warnings."""
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_foil_advisories(config: FoilPlanConfiguration) -> ValidationResult:
    """Warn about settings that produce a buildable but weak plan.

    Advisories checked:
    - Walls deeper than one wide roll covers without a horizontal seam
    - Planned overlaps below the manufacturer minimum
    - A wide-only strategy with a narrow-only foil
    - Structural separation requested for a structural main foil
    """
    result = ValidationResult()

    if config.pool.depth > DEEP_WALL_THRESHOLD:
        result.add_warning(
            path="pool.depth",
            message=(
                f"Wall depth of {config.pool.depth:.2f} m exceeds {DEEP_WALL_THRESHOLD:.2f} m; "
                "walls will need a horizontal seam"
            ),
            suggestion=(
                f"Walls will be stacked from {RollWidth.NARROW.label} strips; "
                "check the seam height with the installer"
            ),
        )

    planning = config.planning
    if planning.overlap_bottom < MIN_OVERLAP_BOTTOM:
        result.add_warning(
            path="planning.overlap_bottom",
            message=(
                f"Bottom overlap {planning.overlap_bottom:.2f} m is below the "
                f"{MIN_OVERLAP_BOTTOM:.2f} m minimum"
            ),
            suggestion="Overlapped bottom seams will be flagged as errors",
        )
    if planning.overlap_wall < MIN_OVERLAP_WALL:
        result.add_warning(
            path="planning.overlap_wall",
            message=(
                f"Wall overlap {planning.overlap_wall:.2f} m is below the "
                f"{MIN_OVERLAP_WALL:.2f} m minimum"
            ),
            suggestion="Wall seams will be flagged as errors",
        )

    material = config_to_material(config.material)
    if planning.strategy is PlanStrategy.WIDE_ONLY and material.narrow_only:
        result.add_warning(
            path="planning.strategy",
            message=(
                f"{config.material.foil_type.value} foil only comes on "
                f"{RollWidth.NARROW.label} rolls"
            ),
            suggestion="Use the narrow or auto strategy",
        )
    if planning.separate_structural and material.foil_type is FoilType.STRUCTURAL:
        result.add_warning(
            path="planning.separate_structural",
            message="The main foil is already structural; nothing is split out",
        )

    return result


def check_feature_placement(config: FoilPlanConfiguration) -> ValidationResult:
    """Check that stairs and splash pool fit inside the pool without overlapping."""
    result = ValidationResult()
    if config.stairs is None and config.splash_pool is None:
        return result

    try:
        pool = config_to_pool(config.pool)
        stairs = config_to_stairs(config.stairs)
        splash = config_to_splash_pool(config.splash_pool)
    except ValueError as e:
        result.add_error(path="(root)", message=str(e))
        return result

    outline = pool_outline(pool)
    boundary = placement_outline(pool)
    generator = FootprintGenerator()

    if splash is not None and splash.depth >= pool.depth:
        result.add_error(
            path="splash_pool.depth",
            message="Splash pool must be shallower than the pool",
            value=splash.depth,
        )

    for path, index in (
        ("stairs.corner_index", stairs.corner_index if stairs else None),
        ("splash_pool.corner_index", splash.corner_index if splash else None),
    ):
        if index is not None and index >= len(outline):
            result.add_warning(
                path=path,
                message=f"Corner {index} does not exist; wrapping to corner {index % len(outline)}",
            )

    splash_footprint = None
    if splash is not None:
        splash_footprint = generator.splash_pool_footprint(outline, splash)
        if splash_footprint is not None:
            check = validate_element_placement(splash_footprint, boundary)
            if not check.valid:
                result.add_error(path="splash_pool", message=check.error)

    if stairs is not None:
        if stairs.splash_anchor is not None and splash is None:
            result.add_warning(
                path="stairs.splash_anchor",
                message="Stairs are anchored to a splash pool that is not configured",
                suggestion="Add a splash_pool section or use corner_index",
            )
        layout = generator.stairs_layout(outline, stairs, splash)
        if layout is not None:
            check = validate_element_placement(layout.footprint, boundary, splash_footprint)
            if not check.valid:
                result.add_error(path="stairs", message=check.error)

    return result


def describe_config(config: FoilPlanConfiguration) -> list[tuple[str, str]]:
    """What the planner will work with, as (label, text) rows.

    The wall row shows the roll widths the depth rule allows, so a reader
    sees why walls end up narrow or wide before planning.
    """
    pool = config.pool
    if pool.shape is PoolShape.CUSTOM:
        outline = f"custom polygon, {len(pool.vertices)} vertices"
    else:
        outline = f"{pool.shape.value} {pool.length or 0:.2f} x {pool.width or 0:.2f} m"
    rows = [("Pool", f"{outline}, {pool.depth:.2f} m deep")]

    material = config_to_material(config.material)
    seams = "butt-welded" if material.uses_butt_joint else "overlapped"
    rows.append(("Material", f"{material.foil_type.value} foil, {seams} seams"))

    widths = wall_widths_for_depth(pool.depth, material)
    walls = " or ".join(width.label for width in widths)
    planning = config.planning
    rows.append(("Walls", f"{walls} rolls, {planning.wall_layout.value} strips"))

    features = [
        name
        for name, present in (
            ("stairs", config.stairs is not None),
            ("splash pool", config.splash_pool is not None),
        )
        if present
    ]
    rows.append(("Features", ", ".join(features) or "none"))
    if planning.separate_structural and features:
        rows.append(("Anti-slip", "separate structural rolls"))
    return rows


def validate_config(config: FoilPlanConfiguration) -> ValidationResult:
    """Perform full validation of a foil plan configuration.

    Args:
        config: A FoilPlanConfiguration instance (already validated by pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    result.merge(check_foil_advisories(config))
    result.merge(check_feature_placement(config))
    return result
