import uuid
from typing import Optional

from brnd_intelligence.core.errors import QueryRejectedError
from brnd_intelligence.core.logger import logger
from brnd_intelligence.core.models import QueryOutcome
from brnd_intelligence.core.schema import DATABASE_SCHEMA
from brnd_intelligence.modules.sql.executor import QueryExecutor, serialize_rows
from brnd_intelligence.services.sql_generator import SQLGenerator
from brnd_intelligence.services.summarizer import ResultSummarizer, leaderboard_summary


class IntelligenceService:
    def __init__(self, generator: SQLGenerator, executor: QueryExecutor, summarizer: ResultSummarizer,
                 schema: str = DATABASE_SCHEMA):
        self.generator = generator
        self.executor = executor
        self.summarizer = summarizer
        self.schema = schema

    async def process_question(self, question: str, trace_id: Optional[str] = None) -> QueryOutcome:
        """
        生成 SQL -> 校验 + 执行 -> 序列化 -> 总结。
        生成失败抛 GenerationServiceError / GenerationParseError，执行失败抛 QueryRejectedError。
        """
        trace_id = trace_id or str(uuid.uuid4())
        logger.info(f"🚀 [Intelligence] New question: {question}", extra={"trace_id": trace_id})

        # 1. 自然语言 -> SQL
        query = await self.generator.generate(question, self.schema, trace_id=trace_id)

        # 2. 校验 + 执行 (executor 内部不会抛异常)
        result = await self.executor.execute(query.sql, trace_id=trace_id)
        if not result.success:
            raise QueryRejectedError(result.error or "Query execution failed", query.sql, query.explanation)

        # 3. 宽整数转字符串
        rows = serialize_rows(result.data)

        # 4. 根据可视化类型选择总结方式
        visualization_type = query.visualization.type if query.visualization else None
        if visualization_type == "leaderboard" and rows:
            summary = leaderboard_summary(rows, language=self.summarizer.language)
        elif visualization_type == "analysis_post" and rows:
            summary = await self.summarizer.summarize_as_post(rows, question, trace_id=trace_id)
        else:
            summary = await self.summarizer.summarize(question, rows, query.explanation, trace_id=trace_id)

        logger.info(f"🗣️ [Analyst Reply] {summary[:100]}...", extra={"trace_id": trace_id})

        return QueryOutcome(
            sql=query.sql,
            explanation=query.explanation,
            visualization=query.visualization,
            data=rows,
            summary=summary,
            truncated=result.truncated,
        )
