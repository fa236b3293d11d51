import dataclasses
from typing import List


@dataclasses.dataclass(frozen=True)
class IngredientMatch:
    term: str
    ingredient: str
    score: float
    source: str  # 'exact', 'fuzzy'


@dataclasses.dataclass
class ResolutionResult:
    mapped: List[str] = dataclasses.field(default_factory=list)
    unknown: List[str] = dataclasses.field(default_factory=list)
