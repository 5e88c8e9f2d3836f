from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ArticleResponse(CamelModel):
    title: str
    url: str
    publish_date: datetime
    source: str


class ArticleListResponse(CamelModel):
    success: bool = True
    count: int
    articles: List[ArticleResponse]


class RefreshResponse(CamelModel):
    success: bool = True
    message: str
    count: int


class ErrorResponse(CamelModel):
    success: bool = False
    error: str


class HealthResponse(CamelModel):
    status: str
    timestamp: datetime
    articles_count: int
    last_fetch: Optional[datetime] = None
