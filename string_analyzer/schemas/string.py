from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List
from datetime import datetime

class StringCreate(BaseModel):
    value: str = Field(..., min_length=1, description="String to analyze")

class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]

    model_config = ConfigDict(frozen=True)

    @property
    def content_hash(self) -> str:
        return self.sha256_hash

class StringResource(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

class StringListResponse(BaseModel):
    data: List[StringResource]
    count: int
    filters_applied: Dict[str, Any] = {}

class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]

class NaturalLanguageResponse(BaseModel):
    data: List[StringResource]
    count: int
    interpreted_query: InterpretedQuery

class ErrorResponse(BaseModel):
    status: int
    error: str
    message: str
