from typing import List, Optional

from pydantic import BaseModel


class GenerateEmailRequest(BaseModel):
    hindiText: Optional[str] = None  # Hindi instruction, spoken or typed


class GenerateEmailResponse(BaseModel):
    englishEmail: str
    hindiEnglishMapping: List[str]


class ErrorResponse(BaseModel):
    error: str
