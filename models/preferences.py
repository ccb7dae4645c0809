from typing import Optional

from pydantic import Field

from models.base import CamelModel
from models.enums import AgeGroup
from models.neighborhood import Coordinates


class UserPreferences(CamelModel):
    budget: float = Field(gt=0, description="Monthly budget in local currency")
    commute: Optional[str] = None
    work_location: Optional[Coordinates] = None
    lifestyle: list[str] = Field(default_factory=list)
    priorities: list[str] = Field(default_factory=list)
    family_size: Optional[int] = Field(None, ge=1)
    age_group: AgeGroup = AgeGroup.YOUNG_PROFESSIONAL
