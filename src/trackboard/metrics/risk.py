"""
Risk Scorer

Scores risk items and buckets them into a likelihood x impact heat map.

Risk Score Formula:
```
risk_score = likelihood_weight x impact_weight    (each 1..5, so 1..25)
```
A missing or unrecognized likelihood or impact scores 0 ("unscored").
The stored ``riskScore`` on a record is never trusted; scores are always
recomputed from likelihood and impact.

Usage:
    scorer = RiskScorer()
    scorer.score("Likely", "Major")       # 16
    matrix = scorer.heat_map(project.risks)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from trackboard.models import OPEN_RISK_STATUSES, RISK_IMPACTS, RISK_LIKELIHOODS, RiskItem
from trackboard.metrics.base import MetricsCalculatorBase, degrade_to


@dataclass(frozen=True)
class RiskCell:
    likelihood: str
    impact: str
    count: int
    score: int


@dataclass
class RiskMatrix:
    """Fully populated likelihood x impact grid."""
    cells: List[RiskCell] = field(default_factory=list)

    def count(self, likelihood: str, impact: str) -> int:
        for cell in self.cells:
            if cell.likelihood == likelihood and cell.impact == impact:
                return cell.count
        return 0

    def as_grid(self) -> Dict[str, Dict[str, int]]:
        """Nested ``{likelihood: {impact: count}}`` mapping in scale order."""
        grid: Dict[str, Dict[str, int]] = {}
        for cell in self.cells:
            grid.setdefault(cell.likelihood, {})[cell.impact] = cell.count
        return grid

    @property
    def total(self) -> int:
        return sum(cell.count for cell in self.cells)


@dataclass(frozen=True)
class RiskSummary:
    total_risks: int
    open_risks: int
    average_score: float
    high_risks: int


class RiskScorer(MetricsCalculatorBase):
    """Computes risk scores and risk overview aggregates."""

    LIKELIHOOD_WEIGHTS: Dict[str, int] = {label: i + 1 for i, label in enumerate(RISK_LIKELIHOODS)}
    IMPACT_WEIGHTS: Dict[str, int] = {label: i + 1 for i, label in enumerate(RISK_IMPACTS)}

    # (minimum score, label), checked top-down
    RISK_LEVELS: Tuple[Tuple[int, str], ...] = (
        (15, "Very High"),
        (10, "High"),
        (5, "Medium"),
        (1, "Low"),
    )

    def run(self, risks: Sequence[RiskItem]) -> RiskMatrix:
        return self.heat_map(risks)

    def score(self, likelihood: Optional[str], impact: Optional[str]) -> int:
        """Likelihood weight times impact weight; 0 when either is unknown."""
        if not isinstance(likelihood, str) or not isinstance(impact, str):
            return 0
        likelihood_weight = self.LIKELIHOOD_WEIGHTS.get(likelihood, 0)
        impact_weight = self.IMPACT_WEIGHTS.get(impact, 0)
        return likelihood_weight * impact_weight

    def score_risk(self, risk: RiskItem) -> int:
        return self.score(risk.likelihood, risk.impact)

    def risk_level(self, score: float) -> str:
        for minimum, label in self.RISK_LEVELS:
            if score >= minimum:
                return label
        return "Unscored"

    @degrade_to(list)
    def with_scores(self, risks: Sequence[RiskItem]) -> List[RiskItem]:
        """Copies of ``risks`` with ``risk_score`` recomputed."""
        return [risk.model_copy(update={"risk_score": self.score_risk(risk)}) for risk in risks or []]

    @degrade_to(RiskMatrix)
    def heat_map(self, risks: Sequence[RiskItem]) -> RiskMatrix:
        """
        Count risks per (likelihood, impact) cell.

        Every combination of the two scales is present, zero-count cells
        included. Cells run from the highest likelihood down and, within a
        row, from the lowest impact up, matching the rendered grid. Risks
        with an unrecognized likelihood or impact are left out.
        """
        counts: Dict[Tuple[str, str], int] = {}
        skipped = 0
        for risk in risks or []:
            if risk.likelihood in self.LIKELIHOOD_WEIGHTS and risk.impact in self.IMPACT_WEIGHTS:
                key = (risk.likelihood, risk.impact)
                counts[key] = counts.get(key, 0) + 1
            else:
                skipped += 1

        if skipped:
            self.logger.debug("heat_map_skipped_risks", skipped=skipped)

        cells = [
            RiskCell(
                likelihood=likelihood,
                impact=impact,
                count=counts.get((likelihood, impact), 0),
                score=self.score(likelihood, impact),
            )
            for likelihood in reversed(RISK_LIKELIHOODS)
            for impact in RISK_IMPACTS
        ]
        return RiskMatrix(cells=cells)

    @degrade_to(lambda: RiskSummary(total_risks=0, open_risks=0, average_score=0.0, high_risks=0))
    def summarize(self, risks: Sequence[RiskItem]) -> RiskSummary:
        """Headline numbers for the risk overview."""
        risks = list(risks or [])
        scores = [self.score_risk(risk) for risk in risks]
        threshold = self.settings.HIGH_RISK_SCORE_THRESHOLD
        return RiskSummary(
            total_risks=len(risks),
            open_risks=sum(1 for risk in risks if risk.status in OPEN_RISK_STATUSES),
            average_score=round(sum(scores) / len(scores), 2) if scores else 0.0,
            high_risks=sum(1 for score in scores if score >= threshold),
        )

    @degrade_to(list)
    def top_risks(self, risks: Sequence[RiskItem], limit: Optional[int] = None) -> List[RiskItem]:
        """Highest-scoring open risks, scores recomputed, ties in input order."""
        limit = self.settings.TOP_RISKS_LIMIT if limit is None else limit
        open_risks = [risk for risk in self.with_scores(risks) if risk.status in OPEN_RISK_STATUSES]
        open_risks.sort(key=lambda risk: risk.risk_score, reverse=True)
        return open_risks[:max(limit, 0)]
