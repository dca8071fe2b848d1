"""
Pydantic models for BrandGuard: brand rules, document snapshots, reports
and remediation actions.
"""
from enum import Enum
from typing import Any, List, Optional

from pydantic import (
    BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
)

from brandguard.utils import RGB, coerce_color, hex_to_rgb


# ============================================================================
# ENUMS
# ============================================================================

class ViolationCategory(str, Enum):
    """Rule category a violation belongs to."""
    COLOR = "color"
    FONT = "font"
    LOGO = "logo"


class ViolationType(str, Enum):
    """Which attribute of a layer broke the rule."""
    FILL = "fill"
    STROKE = "stroke"
    TEXT = "text"
    FONT = "font"
    WIDTH = "width"
    HEIGHT = "height"
    ASPECT_RATIO = "aspectRatio"
    POSITION = "position"
    MISSING = "missing"


class LogoPosition(str, Enum):
    """Coarse placement of a logo in the document's 3x3 partition."""
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"


class ScoreBand(str, Enum):
    """Human-readable rating for a compliance score."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"
    POOR = "Poor"
    CRITICAL = "Critical"


class RemediationAttribute(str, Enum):
    """Layer property a remediation action sets."""
    FILL = "fill"
    STROKE = "stroke"
    TEXT_COLOR = "textColor"
    FONT_FAMILY = "fontFamily"
    BOUNDS = "bounds"
    POSITION = "position"


# ============================================================================
# BRAND RULES
# ============================================================================

class RuleModel(BaseModel):
    """Base for rule models: immutable, camelCase or snake_case input."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class BrandColor(RuleModel):
    """An approved palette entry."""
    name: str
    hex: str
    usage: Optional[str] = None

    @field_validator("hex", mode="before")
    @classmethod
    def normalize_hex(cls, value: Any) -> str:
        rgb = hex_to_rgb(value)
        if rgb is None:
            raise ValueError(f"Invalid brand color hex: {value!r}")
        return "#{:02X}{:02X}{:02X}".format(*rgb)

    @computed_field
    @property
    def rgb(self) -> RGB:
        return hex_to_rgb(self.hex)


class ColorRules(RuleModel):
    approved: List[BrandColor] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    tolerance: float = Field(default=10, ge=0, description="Max RGB distance still counted as approved")

    @field_validator("tolerance", mode="before")
    @classmethod
    def default_tolerance(cls, value: Any) -> Any:
        return 10 if value is None else value


class ApprovedFont(RuleModel):
    name: str
    fallback: Optional[str] = None


class FontRules(RuleModel):
    approved: List[ApprovedFont] = Field(default_factory=lambda: list(DEFAULT_FONTS))
    default: Optional[ApprovedFont] = None

    @model_validator(mode="before")
    @classmethod
    def default_to_first_approved(cls, data: Any) -> Any:
        # An omitted default font falls back to the first approved one
        if isinstance(data, dict) and data.get("default") is None:
            approved = data.get("approved", DEFAULT_FONTS)
            if approved:
                data = {**data, "default": approved[0]}
        return data


class AspectRatioRange(RuleModel):
    min: float = Field(default=1.5, ge=0)
    max: float = Field(default=3.0, ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "AspectRatioRange":
        if self.min > self.max:
            raise ValueError(f"aspectRatio.min ({self.min}) exceeds aspectRatio.max ({self.max})")
        return self


class LogoRule(RuleModel):
    identifier: str = "logo"
    min_width: float = Field(default=100, ge=0, alias="minWidth")
    min_height: float = Field(default=50, ge=0, alias="minHeight")
    aspect_ratio: AspectRatioRange = Field(default_factory=AspectRatioRange, alias="aspectRatio")
    allowed_positions: List[LogoPosition] = Field(
        default_factory=lambda: [
            LogoPosition.TOP_LEFT, LogoPosition.TOP_RIGHT,
            LogoPosition.BOTTOM_LEFT, LogoPosition.BOTTOM_RIGHT,
        ],
        alias="allowedPositions"
    )
    min_distance_from_edge: float = Field(default=20, ge=0, alias="minDistanceFromEdge")


class BrandRules(RuleModel):
    """Complete brand guideline ruleset. Every field carries its default here."""
    brand_name: str = Field(default="Enterprise Brand", alias="brandName")
    colors: ColorRules = Field(default_factory=ColorRules)
    fonts: FontRules = Field(default_factory=FontRules)
    logo: LogoRule = Field(default_factory=LogoRule)


DEFAULT_PALETTE = (
    BrandColor(name="Primary Blue", hex="#0066CC", usage="primary"),
    BrandColor(name="Secondary Blue", hex="#003D7A", usage="secondary"),
    BrandColor(name="Accent Orange", hex="#FF6600", usage="accent"),
    BrandColor(name="Neutral Gray", hex="#666666", usage="text"),
    BrandColor(name="White", hex="#FFFFFF", usage="background"),
    BrandColor(name="Black", hex="#000000", usage="text"),
)

DEFAULT_FONTS = (
    ApprovedFont(name="Roboto", fallback="sans-serif"),
    ApprovedFont(name="Open Sans", fallback="sans-serif"),
)


# ============================================================================
# DOCUMENT SNAPSHOT
# ============================================================================

class Bounds(BaseModel):
    """Axis-aligned bounding box in document pixels."""
    model_config = ConfigDict(frozen=True)

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @field_validator("x", "y", "width", "height", mode="before")
    @classmethod
    def missing_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class LayerSnapshot(BaseModel):
    """Read-only view of one layer's visual attributes."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: Optional[str] = None
    type: str = "generic"
    bounds: Bounds = Field(default_factory=Bounds)
    fill: Optional[str] = None
    stroke: Optional[str] = None
    text_color: Optional[str] = Field(default=None, alias="textColor")
    font_family: Optional[str] = Field(default=None, alias="fontFamily")

    @field_validator("fill", "stroke", "text_color", mode="before")
    @classmethod
    def normalize_color(cls, value: Any) -> Optional[str]:
        return coerce_color(value)

    @field_validator("bounds", mode="before")
    @classmethod
    def missing_bounds(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_text(self) -> bool:
        return self.type == "text"


class DocumentSnapshot(BaseModel):
    """Immutable snapshot of a document: its dimensions and layers."""
    model_config = ConfigDict(frozen=True)

    width: float = Field(default=1920, gt=0)
    height: float = Field(default=1080, gt=0)
    layers: List[LayerSnapshot] = []

    def get_layer(self, layer_id: str) -> Optional[LayerSnapshot]:
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None


# ============================================================================
# REPORTS
# ============================================================================

class Violation(BaseModel):
    """A single non-compliant attribute on a single layer."""
    model_config = ConfigDict(frozen=True)

    layer_id: Optional[str] = None
    layer_name: str = ""
    category: ViolationCategory
    subtype: ViolationType
    current_value: Any = None
    suggested_value: Any = None
    message: str = ""


class CategoryReport(BaseModel):
    """Compliance status and violations for one rule category."""
    model_config = ConfigDict(frozen=True)

    category: ViolationCategory
    violations: List[Violation] = []
    found: bool = True
    all_values: List[str] = []
    details: str = ""

    @computed_field
    @property
    def violation_count(self) -> int:
        return len(self.violations)

    @computed_field
    @property
    def is_compliant(self) -> bool:
        return self.violation_count == 0


class ComplianceReport(BaseModel):
    """Unified report across colors, fonts and logo."""
    model_config = ConfigDict(frozen=True)

    colors: CategoryReport
    fonts: CategoryReport
    logo: CategoryReport
    score: int = Field(ge=0, le=100)
    band: ScoreBand

    @computed_field
    @property
    def is_compliant(self) -> bool:
        return all(report.is_compliant for report in self.categories())

    def categories(self) -> List[CategoryReport]:
        return [self.colors, self.fonts, self.logo]

    def for_category(self, category: ViolationCategory) -> CategoryReport:
        return {
            ViolationCategory.COLOR: self.colors,
            ViolationCategory.FONT: self.fonts,
            ViolationCategory.LOGO: self.logo,
        }[category]


# ============================================================================
# REMEDIATION
# ============================================================================

class RemediationAction(BaseModel):
    """A proposed corrected value for a layer, not yet applied."""
    model_config = ConfigDict(frozen=True)

    layer_id: str
    layer_name: str = ""
    category: ViolationCategory
    attribute: RemediationAttribute
    proposed_value: Any
    fixes: List[str] = []
    step: int = Field(default=1, ge=1, description="Order of this action among actions on the same layer")


class CategoryFixResult(BaseModel):
    """Outcome of applying one category's remediation actions."""
    category: ViolationCategory
    fixed: int = 0
    failed: int = 0
    message: str = ""


class FixSummary(BaseModel):
    """Aggregate outcome of a fix-all run; partial failures are counted, not raised."""
    colors: CategoryFixResult
    fonts: CategoryFixResult
    logo: CategoryFixResult

    @computed_field
    @property
    def total_fixed(self) -> int:
        return self.colors.fixed + self.fonts.fixed + self.logo.fixed

    @computed_field
    @property
    def total_failed(self) -> int:
        return self.colors.failed + self.fonts.failed + self.logo.failed


# ============================================================================
# API MODELS
# ============================================================================

class CheckRequest(BaseModel):
    """Request for checking a document against brand rules."""
    document: Optional[DocumentSnapshot] = None
    rules: Optional[BrandRules] = None


class ScoreRequest(BaseModel):
    """Violation counts per category for a standalone score calculation."""
    colors: int = Field(default=0, ge=0)
    fonts: int = Field(default=0, ge=0)
    logo: int = Field(default=0, ge=0)


class ScoreResponse(BaseModel):
    score: int
    band: ScoreBand


class PlanRequest(CheckRequest):
    """Request for a remediation plan."""
    categories: List[ViolationCategory] = Field(
        default_factory=lambda: list(ViolationCategory)
    )


class PlanResponse(BaseModel):
    actions: List[RemediationAction] = []
    report: ComplianceReport


class FixResponse(BaseModel):
    """Result of applying all fixes to a document and re-checking it."""
    summary: FixSummary
    document: DocumentSnapshot
    report: ComplianceReport


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    services: dict = {}
