import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from brnd_intelligence.core.errors import GenerationParseError, GenerationServiceError, QueryRejectedError
from brnd_intelligence.core.logger import logger
from brnd_intelligence.schemas.response import ErrorResponse, IntelligenceQueryResponse, QueryFailureResponse
from brnd_intelligence.services.intelligence_service import IntelligenceService

router = APIRouter(prefix="/api/intelligence", tags=["Intelligence"])

# 错误信息里出现这些标记，说明是 LLM 服务侧的问题 (key / 配额 / 模型)
AI_SERVICE_MARKERS = ("API key", "quota", "model")


def get_intelligence_service(request: Request) -> IntelligenceService:
    """lifespan 里构建好的 service，测试里用 dependency_overrides 替换"""
    return request.app.state.intelligence_service


def _is_ai_service_error(exc: Exception) -> bool:
    if isinstance(exc, GenerationServiceError):
        return True
    if isinstance(exc, GenerationParseError):
        return False
    message = str(exc)
    return any(marker in message for marker in AI_SERVICE_MARKERS)


def _json(model, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=model.model_dump())


@router.post("/query", responses={
    400: {"model": QueryFailureResponse},
    503: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
})
async def intelligence_query_endpoint(
    payload: Any = Body(None),
    service: IntelligenceService = Depends(get_intelligence_service),
):
    """
    自然语言分析接口：
    输入：{"question": "top 3 brands this week"}
    输出：SQL + 数据 + 可视化建议 + AI 总结
    """
    question = payload.get("question") if isinstance(payload, dict) else None
    if not isinstance(question, str) or not question.strip():
        return _json(ErrorResponse(error="Question is required"), 400)

    trace_id = str(uuid.uuid4())

    try:
        outcome = await service.process_question(question, trace_id=trace_id)

    except QueryRejectedError as e:
        logger.warning(f"🛑 Query failed: {e.error}", extra={"trace_id": trace_id, "question": question, "sql": e.sql})
        return _json(QueryFailureResponse(error=e.error, sql=e.sql, explanation=e.explanation), 400)

    except Exception as e:
        message = str(e) or "Internal server error"
        logger.error("Intelligence API error", extra={"trace_id": trace_id, "question": question}, exc_info=True)
        if _is_ai_service_error(e):
            return _json(ErrorResponse(error=f"AI Service Error: {message}"), 503)
        return _json(ErrorResponse(error=message), 500)

    response = IntelligenceQueryResponse(
        sql=outcome.sql,
        explanation=outcome.explanation,
        visualization=outcome.visualization.model_dump(exclude_none=True) if outcome.visualization else None,
        data=outcome.data,
        summary=outcome.summary,
        rowCount=outcome.row_count,
        truncated=outcome.truncated,
    )
    return _json(response, 200)
