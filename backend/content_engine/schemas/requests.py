"""Request Schemas — Pydantic models for every JSON endpoint body.

Invariants:
    - Wire names are camelCase (maxWords, draftText); snake_case also accepted
    - Unknown fields are ignored (frontend sends extra UI state)
    - Required-ness of text fields is checked by the handlers, which answer with
      endpoint-specific 400 messages; schemas only enforce types

Design Decisions:
    - Numbers typed FiniteFloat | None so 300, 300.0 and "300" all validate while
      inf and nan (including the JSON overflow 1e400) are a 400; handlers treat
      non-positive values as "not set"
"""

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


class SourceDocument(_CamelModel):
    """One piece of source material attached to a draft."""
    name: str | None = None
    url: str | None = None
    kind: str | None = None
    text: str | None = None


class GenerateRequest(_CamelModel):
    model: str | None = None
    title: str | None = None
    notes: str | None = None
    scenario: str | None = None
    selected_types: list[str] = Field(default_factory=list)
    version_type: str | None = None
    max_words: FiniteFloat | None = None
    public_search: bool = False
    sources: list[SourceDocument] = Field(default_factory=list)
    project_id: str | int | None = None
    include_analysis: bool = False


class RewriteRequest(_CamelModel):
    text: str | None = None
    notes: str | None = None
    scenario: str | None = None
    version_type: str | None = None
    model: str | None = None
    public_search: bool = False
    max_words: FiniteFloat | None = None


class QueryRequest(_CamelModel):
    question: str | None = None
    draft_text: str | None = None
    scenario: str | None = None
    version_type: str | None = None
    sources: list[SourceDocument] = Field(default_factory=list)
    public_search: bool = False


class AnalyseStatementsRequest(_CamelModel):
    draft_text: str | None = None
    model_id: str | None = None
    max_statements: FiniteFloat | None = None


class WebSearchRequest(_CamelModel):
    query: str | None = None
    max_results: int | None = Field(None, ge=1, le=20)


class WebTestRequest(_CamelModel):
    query: str | None = None


class FetchUrlRequest(_CamelModel):
    url: str | None = None
