from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Employee(BaseModel):
    """Employee document stored in the ``employees`` collection.

    No field is required; the store persists whatever subset is set.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = Field(None, description="Store-assigned identifier, set after insert")
    name: Optional[str] = None
    salary: Optional[int] = None
    language: Optional[str] = Field(None, description="Skill or tech stack label")
    city: Optional[str] = None
    is_manager: Optional[bool] = Field(None, alias="isManager")

    def to_document(self) -> Dict[str, Any]:
        """Return the MongoDB document for this record, without the id."""
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
