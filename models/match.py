from pydantic import Field

from models.base import CamelModel


class CategoryScore(CamelModel):
    score: float = Field(ge=0, le=1)
    weight: float = Field(ge=0, le=1)
    weighted: float = Field(ge=0, le=1)


class MatchScore(CamelModel):
    neighborhood_id: str
    weighted_scores: dict[str, CategoryScore]
    total_score: float = Field(ge=0, le=1)
    reasoning: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.3, le=1)
    data_quality: float = Field(ge=0, le=1)

    @property
    def category_scores(self) -> dict[str, float]:
        return {name: entry.score for name, entry in self.weighted_scores.items()}

    def summary(self) -> str:
        """One-line summary for logs and the CLI."""
        breakdown = " ".join(
            f"{name[0].upper()}:{entry.score:.2f}"
            for name, entry in self.weighted_scores.items()
        )
        return f"[{self.total_score:.2f}] {self.neighborhood_id} | {breakdown} | conf {self.confidence:.2f}"
