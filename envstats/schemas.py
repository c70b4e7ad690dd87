"""Pydantic schemas for all result artifacts"""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field


# Estimation schemas
class BootstrapResult(BaseModel):
    """Outcome of one bootstrap estimate."""
    model_config = ConfigDict(frozen=True)

    replicate_set: tuple[float, ...] = Field(..., description="One statistic value per resample, in draw order")
    bootstrap_mean: float
    bootstrap_se: float = Field(..., description="Sample standard deviation of the replicates")
    ci_lower: float
    ci_upper: float
    observed: float = Field(..., description="Statistic computed on the original sample")
    bias: float = Field(..., description="bootstrap_mean - observed")
    trials: int = Field(..., ge=1)
    confidence_level: float = Field(..., gt=0.0, lt=1.0)
    n: int = Field(..., ge=1, description="Sample size, also the size of every resample")

    def to_dict(self, include_replicates: bool = False) -> dict[str, Any]:
        """Convert to dict for JSON storage."""
        exclude = None if include_replicates else {"replicate_set"}
        return self.model_dump(exclude=exclude)


class ConfidenceInterval(BaseModel):
    """Confidence interval for one group."""
    group: str
    method: str = Field(..., description="t or bootstrap")
    estimate: float
    lower: float
    upper: float
    confidence_level: float = Field(..., gt=0.0, lt=1.0)
    se: float | None = None


# Descriptive schemas
class GroupSummary(BaseModel):
    """Descriptive statistics for one group of observations."""
    n: int = Field(..., ge=1)
    mean: float
    median: float
    sd: float
    var: float
    min: float
    max: float
    q25: float
    q75: float
    skewness: float


# Inference schemas
class TTestResult(BaseModel):
    """Welch two-sample t-test."""
    groups: tuple[str, str]
    means: tuple[float, float]
    mean_difference: float = Field(..., description="means[0] - means[1]")
    statistic: float
    df: float
    p_value: float
    ci_lower: float
    ci_upper: float
    confidence_level: float
    alternative: str = "two-sided"
    significant: bool


class AnovaResult(BaseModel):
    """One-way ANOVA table."""
    groups: list[str]
    group_sizes: list[int]
    df_between: int
    df_within: int
    ss_between: float
    ss_within: float
    ms_between: float
    ms_within: float
    f_statistic: float
    p_value: float
    significant: bool
    residuals: list[float] = Field(default_factory=list, exclude=True)
    fitted: list[float] = Field(default_factory=list, exclude=True)


class AssumptionTest(BaseModel):
    """Result of an assumption check (normality, equal variances)."""
    test: str
    statistic: float
    p_value: float
    alpha: float
    passes: bool = Field(..., description="True when p_value >= alpha")
    variable: str | None = None


class CorrelationResult(BaseModel):
    """Pearson correlation between two variables."""
    x: str
    y: str
    r: float = Field(..., ge=-1.0, le=1.0)
    p_value: float
    n: int
