from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class OrderOptionsDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    section_order: Optional[List[str]] = Field(default=None, alias="sectionOrder")
    lifecycle_order: Optional[Dict[str, int]] = Field(default=None, alias="lifecycleOrder")

    def as_payload(self) -> dict[str, object]:
        return {
            "section_order": self.section_order,
            "lifecycle_order": self.lifecycle_order,
        }


class FixRequest(BaseModel):
    path: str
    text: Optional[str] = None
    options: OrderOptionsDTO = OrderOptionsDTO()


class TextEditDTO(BaseModel):
    path: str
    start: Tuple[int, int]
    end: Tuple[int, int]
    start_offset: int
    end_offset: int
    replacement: str


class FindingDTO(BaseModel):
    path: str
    line: int
    col: int
    code: str
    message: str
    severity: str = "warning"


class FixResponse(BaseModel):
    path: str = ""
    edits: List[TextEditDTO] = []
    findings: List[FindingDTO] = []
    warnings: List[str] = []
    errors: List[str] = []
