import json
import re
from typing import Any, Dict, List, Optional

from brnd_intelligence.core.logger import logger
from brnd_intelligence.core.prompts import (
    ANALYSIS_POST_PROMPT,
    ANALYSIS_POST_SYSTEM,
    DATA_SUMMARY_PROMPT,
    DATA_SUMMARY_SYSTEM,
    DEFAULT_LANGUAGE,
    LEADERBOARD_HEADERS,
    SUMMARY_FALLBACKS,
)

PREVIEW_ROWS = 10
ROUND_PATTERN = re.compile(r"Round\s*(\d+)\s*vs\s*Round\s*(\d+)", re.IGNORECASE)


def leaderboard_summary(rows: List[Dict[str, Any]], top_n: int = 3, language: str = DEFAULT_LANGUAGE) -> str:
    """快速路径：本地模板生成，不调用 LLM"""
    lines = [LEADERBOARD_HEADERS.get(language, LEADERBOARD_HEADERS[DEFAULT_LANGUAGE])]
    for idx, row in enumerate(rows[:top_n], start=1):
        name = row.get("name") or "N/A"
        score = row.get("score") or 0
        lines.append(f"{idx}. {name} ({score} pts)")
    return "\n".join(lines)


def fallback_summary(row_count: int, explanation: str, language: str = DEFAULT_LANGUAGE) -> str:
    template = SUMMARY_FALLBACKS.get(language, SUMMARY_FALLBACKS[DEFAULT_LANGUAGE])
    return template.format(row_count=row_count, explanation=explanation or "").strip()


def _preview(rows: List[Dict[str, Any]]) -> str:
    return json.dumps(rows[:PREVIEW_ROWS], indent=2, ensure_ascii=False, default=str)


class ResultSummarizer:
    """
    结果总结 (Analyst)。
    总结失败只降级为模板文案，不影响整个请求。
    """

    def __init__(self, llm, language: str = DEFAULT_LANGUAGE, max_words: int = 200):
        self.llm = llm
        self.language = language
        self.max_words = max_words

    async def summarize(self, question: str, rows: List[Dict[str, Any]], explanation: str,
                        trace_id: Optional[str] = None) -> str:
        row_count = len(rows)
        more_rows = f"\n... and {row_count - PREVIEW_ROWS} more rows\n" if row_count > PREVIEW_ROWS else ""

        prompt = DATA_SUMMARY_PROMPT.format(
            question=question,
            explanation=explanation,
            row_count=row_count,
            data_preview=_preview(rows),
            more_rows=more_rows,
            language=self.language,
            max_words=self.max_words,
        )

        logger.info("🧠 [Analyst] Analyzing data...", extra={"trace_id": trace_id})
        try:
            text = await self.llm.complete(
                DATA_SUMMARY_SYSTEM.format(language=self.language),
                prompt,
                temperature=0.7,
                max_tokens=300,
            )
        except Exception as e:
            logger.warning(f"Summary Generation Failed: {e}", extra={"trace_id": trace_id})
            return fallback_summary(row_count, explanation, self.language)

        return text or fallback_summary(row_count, explanation, self.language)

    async def summarize_as_post(self, rows: List[Dict[str, Any]], question: str,
                                trace_id: Optional[str] = None) -> str:
        match = ROUND_PATTERN.search(question)
        current_round = match.group(1) if match else "current"
        previous_round = match.group(2) if match else "previous"

        prompt = ANALYSIS_POST_PROMPT.format(
            current_round=current_round,
            previous_round=previous_round,
            data_preview=_preview(rows),
        )

        logger.info(f"📝 [Analyst] Writing post for Round {current_round} vs {previous_round}",
                    extra={"trace_id": trace_id})
        try:
            text = await self.llm.complete(ANALYSIS_POST_SYSTEM, prompt, temperature=0.7)
        except Exception as e:
            logger.warning(f"Analysis Post Generation Failed: {e}", extra={"trace_id": trace_id})
            return fallback_summary(len(rows), "", self.language)

        return text or fallback_summary(len(rows), "", self.language)
