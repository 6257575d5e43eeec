from pydantic import BaseModel
from typing import List, Optional


class SuggestionRequest(BaseModel):
    location: Optional[str] = None


class SuggestionResponse(BaseModel):
    suggestions: List[str]
