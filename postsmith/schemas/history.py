"""History schemas."""

from datetime import datetime
from typing import Optional

from postsmith.records import HistoryItem
from postsmith.schemas.common import CamelModel
from postsmith.schemas.quality import QualityAssessment


class HistoryItemResponse(CamelModel):
    id: str
    topic: str
    platform: str
    tone: str
    language: str
    text: str
    quality: Optional[QualityAssessment] = None
    refinement: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_item(cls, item: HistoryItem) -> "HistoryItemResponse":
        return cls(
            id=item.id,
            topic=item.topic,
            platform=item.platform,
            tone=item.tone,
            language=item.language,
            text=item.text,
            quality=item.quality,
            refinement=item.refinement,
            created_at=item.created_at,
        )


class HistoryResponse(CamelModel):
    history: list[HistoryItemResponse]
