import asyncio
import json
import os
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, date, time as dt_time, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from brnd_intelligence.core.errors import QueryExecutionError
from brnd_intelligence.core.logger import logger
from brnd_intelligence.modules.sql.guardrail import is_query_safe, sanitize_sql

# 超过这个范围的整数在 JS 客户端会丢精度，转成字符串
MAX_SAFE_INTEGER = 2 ** 53 - 1

Row = Dict[str, Any]


@dataclass
class ExecutionResult:
    success: bool
    data: Optional[List[Row]] = None
    error: Optional[str] = None
    truncated: bool = False
    latency_ms: int = 0


# ==========================================
# 🛠️ 基础工具函数
# ==========================================
def jsonable(v: Any):
    """
    🔥 核心清洗函数：处理 JSON 不支持的类型，宽整数不截断
    """
    if v is None or isinstance(v, (bool, str, float)):
        return v
    if isinstance(v, int):
        return str(v) if abs(v) > MAX_SAFE_INTEGER else v
    if isinstance(v, Decimal):
        if v == v.to_integral_value():
            return jsonable(int(v))
        return float(v)
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, (dt_time, timedelta)):
        return str(v)
    if isinstance(v, (bytes, bytearray)):
        return v.decode("utf-8", errors="ignore")
    return v


def serialize_rows(rows: Optional[List[Row]]) -> List[Row]:
    return [{key: jsonable(val) for key, val in row.items()} for row in rows or []]


def append_event(path: Optional[str], event: dict):
    """写入审计日志"""
    if not path:
        return
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=False, default=str) + "\n")
    except OSError as e:
        logger.warning(f"❌ [Audit] Failed to write event log: {e}")


def _assert_tabular(result: Any) -> List[Row]:
    # fail-closed：不是表格结果就报错，不做任何强转
    if not isinstance(result, (list, tuple)):
        raise QueryExecutionError("Query result must be an array")
    if not all(isinstance(row, dict) for row in result):
        raise QueryExecutionError("Query result rows must be objects")
    return list(result)


# ==========================================
# API 专用：执行器
# ==========================================
class QueryExecutor:
    def __init__(self, db, timeout_s: float = 10.0, max_rows: int = 1000, audit_path: Optional[str] = None):
        self.db = db
        self.timeout_s = timeout_s
        self.max_rows = max_rows
        self.audit_path = audit_path

    async def execute(self, sql: str, trace_id: Optional[str] = None) -> ExecutionResult:
        """
        校验 -> 清洗 -> 执行单条语句。任何失败都转换成 ExecutionResult，不向外抛异常。
        """
        trace_id = trace_id or str(uuid.uuid4())

        validation = is_query_safe(sql)
        if not validation.safe:
            reason = validation.reason or "Query is not safe"
            logger.warning(f"🛑 [Guardrail] Rejected: {reason}", extra={"trace_id": trace_id, "sql": sql})
            await self._audit(trace_id, sql, 0, False, reason, "REJECTED")
            return ExecutionResult(success=False, error=reason)

        clean_sql = sanitize_sql(sql)
        start = time.time()
        truncated = False
        err = None
        rows: List[Row] = []

        try:
            loop = asyncio.get_running_loop()
            raw = await asyncio.wait_for(
                loop.run_in_executor(None, self.db.query_raw, clean_sql),
                timeout=self.timeout_s,
            )
            rows = _assert_tabular(raw)
            if len(rows) > self.max_rows:
                truncated = True
                rows = rows[:self.max_rows]
        except asyncio.TimeoutError:
            err = f"Query timed out after {self.timeout_s:g}s"
        except Exception as e:
            err = str(e) or "Query execution failed"

        latency_ms = int((time.time() - start) * 1000)
        await self._audit(trace_id, clean_sql, latency_ms, truncated, err, "ERROR" if err else "SUCCESS")

        if err:
            logger.error(f"❌ [Select Error] {err}", extra={"trace_id": trace_id, "sql": clean_sql})
            return ExecutionResult(success=False, error=err, latency_ms=latency_ms)

        logger.info(f"✅ [Executor] {len(rows)} rows in {latency_ms}ms", extra={"trace_id": trace_id})
        return ExecutionResult(success=True, data=rows, truncated=truncated, latency_ms=latency_ms)

    async def _audit(self, trace_id, sql, latency_ms, truncated, err, status):
        if not self.audit_path:
            return
        event = {
            "trace_id": trace_id,
            "route": "INTELLIGENCE_QUERY",
            "sql": sql,
            "latency_ms": latency_ms,
            "truncated": truncated,
            "error": err[:500] if err else None,
            "status": status,
            "ts_iso": datetime.now(timezone.utc).isoformat(),
        }
        # 文件 IO 放到线程池，不阻塞事件循环
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, append_event, self.audit_path, event)
