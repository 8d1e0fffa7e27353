from pydantic import BaseModel
from typing import Any, Optional, Dict, List


class IntelligenceQueryResponse(BaseModel):
    success: bool = True
    sql: str
    explanation: str
    visualization: Optional[Dict[str, Any]] = None   # 前端图表配置
    data: List[Dict[str, Any]] = []                  # 数据 payload (Rows)，宽整数已转字符串
    summary: str
    rowCount: int
    truncated: bool = False


class ErrorResponse(BaseModel):
    error: str


class QueryFailureResponse(ErrorResponse):
    # 带上 SQL 和解释，方便用户修改问题
    sql: str
    explanation: str = ""
