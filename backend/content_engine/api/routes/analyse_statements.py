"""Statement Analysis Route — POST /api/analyse-statements.

Invariants:
    - Always 200 once the OpenAI key is configured: failures are reported with
      ok=false inside the analysis body
"""

from fastapi import APIRouter, Depends

from content_engine.api.dependencies import get_statement_analyser
from content_engine.schemas.requests import AnalyseStatementsRequest
from content_engine.services.handle_analysis import StatementAnalyser

router = APIRouter(prefix="/api/analyse-statements", tags=["analysis"])


@router.post("")
async def analyse_statements(
    body: AnalyseStatementsRequest | None = None,
    analyser: StatementAnalyser = Depends(get_statement_analyser),
):
    body = body or AnalyseStatementsRequest()
    return await analyser.analyse(
        body.draft_text, model_id=body.model_id, max_statements=body.max_statements,
    )
