"""Pydantic models for the cohortboard payload and API.

ObservationRow/AdWeeksPayload mirror the upstream /api/ad-weeks payload.
The remaining models are the view payloads returned to the UI.
"""

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from cohortboard.models.domain import Observation


class ObservationRow(BaseModel):
    """One ad-week row as delivered by the upstream data source.

    Missing or null fields are tolerated: text becomes "", numbers become 0.
    """

    model_config = ConfigDict(extra="ignore")

    ad_id: str = ""
    ad_name_at_launch: str = Field(
        default="", validation_alias=AliasChoices("ad_name_at_launch", "ad_name")
    )
    campaign_id: str = ""
    campaign_name_at_launch: str = Field(
        default="",
        validation_alias=AliasChoices("campaign_name_at_launch", "campaign_name"),
    )
    cohort_week: str = ""
    week_offset: int = 0  # 1..4
    hit_cum: int = 0  # 0/1
    purchases: float = 0.0
    revenue: float = 0.0
    spend: float = 0.0

    @field_validator(
        "ad_id",
        "ad_name_at_launch",
        "campaign_id",
        "campaign_name_at_launch",
        "cohort_week",
        mode="before",
    )
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("week_offset", "hit_cum", mode="before")
    @classmethod
    def _int_or_zero(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @field_validator("purchases", "revenue", "spend", mode="before")
    @classmethod
    def _float_or_zero(cls, value: Any) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    def to_observation(self) -> Observation:
        """Convert to the domain Observation."""
        return Observation(
            ad_id=self.ad_id,
            cohort_week=self.cohort_week,
            week_offset=self.week_offset,
            hit_cum=bool(self.hit_cum),
            ad_name=self.ad_name_at_launch,
            campaign_id=self.campaign_id,
            campaign_name=self.campaign_name_at_launch,
            purchases=self.purchases,
            revenue=self.revenue,
            spend=self.spend,
        )


class AdWeeksPayload(BaseModel):
    """Upstream payload: generation timestamp, row count and rows.

    `count` is informational and is not checked against len(rows).
    """

    model_config = ConfigDict(extra="ignore")

    generated_at: str | None = None
    count: int | None = None
    rows: list[ObservationRow] = Field(default_factory=list)

    @field_validator("rows", mode="before")
    @classmethod
    def _rows_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def observations(self) -> tuple[Observation, ...]:
        """Return the rows as an immutable tuple of domain observations."""
        return tuple(row.to_observation() for row in self.rows)


Trend = Literal["up", "down", "neutral"]


class WeekCell(BaseModel):
    """One week column of a cohort row, with trend against the prior week."""

    week: int
    value: float
    previous: float
    target: float
    trend: Trend


class CohortRowView(BaseModel):
    """Cohort row as rendered in the dashboard table."""

    cohort_week: str
    date: str
    total_assets: int
    hits: int
    week1: float
    week2: float
    week3: float
    week4: float
    cells: list[WeekCell]


class TotalsView(BaseModel):
    """Summary cards above the table."""

    total_assets: int
    hits: int
    week1: float
    week2: float
    week3: float
    week4: float
    method: Literal["weighted", "mean"]


class FilterOptions(BaseModel):
    """Dropdown options per filter dimension ("All" first)."""

    options: dict[str, list[str]]


class DashboardView(BaseModel):
    """Full dashboard payload for the UI."""

    status: Literal["idle", "loading", "ready", "error"]
    filters: dict[str, str]
    rows: list[CohortRowView]
    totals: TotalsView
    empty: bool
    message: str | None
    filter_options: dict[str, list[str]]


class StoreStatus(BaseModel):
    """Load-cycle status of the dataset store."""

    status: Literal["idle", "loading", "ready", "error"]
    error: str | None
    row_count: int
    generated_at: str | None
