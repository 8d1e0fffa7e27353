import json
from datetime import date
from typing import Optional

from pydantic import ValidationError

from brnd_intelligence.core.errors import GenerationParseError, GenerationServiceError
from brnd_intelligence.core.llm import extract_json_from_text
from brnd_intelligence.core.logger import logger
from brnd_intelligence.core.models import GeneratedQuery
from brnd_intelligence.core.prompts import GEN_SQL_PROMPT, GEN_SQL_SYSTEM


def build_sql_prompt(question: str, schema: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return GEN_SQL_PROMPT.format(
        schema=schema,
        month_label=today.strftime("%B %Y"),
        today=today.isoformat(),
        month_start=today.replace(day=1).isoformat(),
        question=question,
    )


def parse_generated_query(raw: str) -> GeneratedQuery:
    """模型输出是不可信输入：先抽取 JSON，再按 GeneratedQuery 做结构校验"""
    if not raw or not raw.strip():
        raise GenerationParseError("No response from model", raw_response=raw)

    try:
        payload = json.loads(extract_json_from_text(raw))
    except json.JSONDecodeError as e:
        raise GenerationParseError(f"Failed to parse model response as JSON: {e}", raw_response=raw) from e

    if not isinstance(payload, dict):
        raise GenerationParseError("Model response is not a JSON object", raw_response=raw)

    try:
        return GeneratedQuery.model_validate(payload)
    except ValidationError as e:
        raise GenerationParseError(
            f"Model response has an invalid shape: {e.errors()[0].get('msg')}", raw_response=raw
        ) from e


class SQLGenerator:
    def __init__(self, llm, temperature: float = 0.3):
        self.llm = llm
        self.temperature = temperature

    async def generate(self, question: str, schema: str, trace_id: Optional[str] = None) -> GeneratedQuery:
        prompt = build_sql_prompt(question, schema)
        logger.info("[Step 1] Generating SQL", extra={"trace_id": trace_id, "question": question})

        try:
            raw = await self.llm.complete(
                GEN_SQL_SYSTEM, prompt, temperature=self.temperature, json_mode=True
            )
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.error(f"❌ LLM 调用失败: {message}", extra={"trace_id": trace_id})
            raise GenerationServiceError(f"Failed to generate SQL: {message}") from e

        try:
            query = parse_generated_query(raw)
        except GenerationParseError as e:
            logger.error(f"❌ Unusable model response: {e}", extra={"trace_id": trace_id, "raw_response": e.raw_response})
            raise

        logger.info(f"✅ SQL generated: {query.sql[:200]}", extra={"trace_id": trace_id, "sql": query.sql})
        return query
