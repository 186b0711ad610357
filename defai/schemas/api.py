from pydantic import BaseModel, Field

from defai.schemas.token import TokenData


class TokenLookupResponse(BaseModel):
    token: str
    path: str
    website: str
    message: str
    data: TokenData


class PostMessageRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=280)


class PostMessageResponse(BaseModel):
    id: str
    text: str


class HealthResponse(BaseModel):
    status: str
    artifact_dir: str
    artifacts: int
