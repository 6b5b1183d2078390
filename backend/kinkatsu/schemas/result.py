from __future__ import annotations
from typing import Literal, Union
from pydantic import BaseModel

from kinkatsu.errors import ErrorCode

class Issue(BaseModel):
    """One field-addressable problem, e.g. path ["items", 0, "sets", 1, "weightKg"]."""
    path: list[Union[str, int]]
    message: str

class CreatedRef(BaseModel):
    id: str

class ActionResult(BaseModel):
    status: Literal["success", "error"]
    data: CreatedRef | None = None
    code: ErrorCode | None = None
    error: str | None = None
    issues: list[Issue] | None = None

    @classmethod
    def success(cls, entity_id: str) -> "ActionResult":
        return cls(status="success", data=CreatedRef(id=entity_id))

    @classmethod
    def failure(cls, code: ErrorCode, error: str, issues: list[Issue] | None = None) -> "ActionResult":
        return cls(status="error", code=code, error=error, issues=issues)

    @property
    def ok(self) -> bool:
        return self.status == "success"
