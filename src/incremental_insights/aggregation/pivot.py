"""Partner -> advertiser -> campaign pivot tree with rolled-up metrics."""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from incremental_insights.formatting import round_half_up
from incremental_insights.models.record import CampaignRecord

UNKNOWN_PARTNER = "Unknown Partner"
UNKNOWN_ADVERTISER = "Unknown Advertiser"


class PivotLevel(str, Enum):
    PARTNER = "partner"
    ADVERTISER = "advertiser"
    CAMPAIGN = "campaign"


class PivotMetrics(BaseModel):
    """Sums over every record below a node. Averages are derived, never stored."""

    model_config = ConfigDict(frozen=True)

    count: int = 0
    score_sum: float = 0.0
    incremental_budget_sum: float = 0.0
    calculated_opportunity_sum: float = 0.0

    @property
    def avg_score(self) -> float:
        return self.score_sum / self.count if self.count else 0.0

    @property
    def display_avg_score(self) -> int:
        return round_half_up(self.avg_score)

    @classmethod
    def from_records(cls, records: Iterable[CampaignRecord]) -> "PivotMetrics":
        count = 0
        score = budget = opportunity = 0.0
        for r in records:
            count += 1
            score += r.score
            budget += r.incremental_budget
            opportunity += r.calculated_opportunity
        return cls(
            count=count,
            score_sum=score,
            incremental_budget_sum=budget,
            calculated_opportunity_sum=opportunity,
        )

    @classmethod
    def combine(cls, parts: Iterable["PivotMetrics"]) -> "PivotMetrics":
        count = 0
        score = budget = opportunity = 0.0
        for m in parts:
            count += m.count
            score += m.score_sum
            budget += m.incremental_budget_sum
            opportunity += m.calculated_opportunity_sum
        return cls(
            count=count,
            score_sum=score,
            incremental_budget_sum=budget,
            calculated_opportunity_sum=opportunity,
        )


class AggregationNode(BaseModel):
    """
    Partner nodes hold advertiser children; advertiser nodes hold the
    campaign records themselves as leaves.
    """

    model_config = ConfigDict(frozen=True)

    node_id: str
    name: str
    level: PivotLevel
    metrics: PivotMetrics
    children: list["AggregationNode"] = Field(default_factory=list)
    records: list[CampaignRecord] = Field(default_factory=list)


def partner_node_id(partner: str) -> str:
    return f"partner:{partner}"


def advertiser_node_id(partner: str, advertiser: str) -> str:
    return f"{partner_node_id(partner)}/advertiser:{advertiser}"


def build_pivot(records: Iterable[CampaignRecord]) -> list[AggregationNode]:
    """Build the tree fresh from records; groups appear in first-seen order."""
    grouped: dict[str, dict[str, list[CampaignRecord]]] = {}
    for record in records:
        partner = record.partner or UNKNOWN_PARTNER
        advertiser = record.advertiser or UNKNOWN_ADVERTISER
        grouped.setdefault(partner, {}).setdefault(advertiser, []).append(record)

    tree: list[AggregationNode] = []
    for partner, advertisers in grouped.items():
        children = [
            AggregationNode(
                node_id=advertiser_node_id(partner, advertiser),
                name=advertiser,
                level=PivotLevel.ADVERTISER,
                metrics=PivotMetrics.from_records(leaves),
                records=leaves,
            )
            for advertiser, leaves in advertisers.items()
        ]
        tree.append(
            AggregationNode(
                node_id=partner_node_id(partner),
                name=partner,
                level=PivotLevel.PARTNER,
                metrics=PivotMetrics.combine(c.metrics for c in children),
                children=children,
            )
        )
    return tree


class PivotRow(BaseModel):
    """One visible line of a rendered pivot."""

    depth: int
    level: PivotLevel
    name: str
    node_id: Optional[str] = None
    expanded: bool = False
    metrics: Optional[PivotMetrics] = None
    record: Optional[CampaignRecord] = None


def visible_rows(tree: list[AggregationNode], expanded: set[str] | frozenset[str]) -> list[PivotRow]:
    """
    Rows shown for a given set of expanded node ids. Collapsed nodes hide
    their descendants; the tree itself is not touched.
    """
    rows: list[PivotRow] = []
    for partner in tree:
        is_open = partner.node_id in expanded
        rows.append(
            PivotRow(
                depth=0,
                level=PivotLevel.PARTNER,
                name=partner.name,
                node_id=partner.node_id,
                expanded=is_open,
                metrics=partner.metrics,
            )
        )
        if not is_open:
            continue
        for advertiser in partner.children:
            adv_open = advertiser.node_id in expanded
            rows.append(
                PivotRow(
                    depth=1,
                    level=PivotLevel.ADVERTISER,
                    name=advertiser.name,
                    node_id=advertiser.node_id,
                    expanded=adv_open,
                    metrics=advertiser.metrics,
                )
            )
            if not adv_open:
                continue
            for record in advertiser.records:
                rows.append(
                    PivotRow(depth=2, level=PivotLevel.CAMPAIGN, name=record.campaign, record=record)
                )
    return rows


def all_node_ids(tree: list[AggregationNode]) -> frozenset[str]:
    """Every partner and advertiser id, for a fully expanded view."""
    ids: set[str] = set()
    for partner in tree:
        ids.add(partner.node_id)
        ids.update(c.node_id for c in partner.children)
    return frozenset(ids)
