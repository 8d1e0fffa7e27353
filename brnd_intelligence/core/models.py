from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from brnd_intelligence.core.logger import logger

VisualizationType = Literal[
    "leaderboard", "analysis_post", "table", "chart", "number", "bar", "line", "pie", "area"
]


class Visualization(BaseModel):
    # 前端图表可能用到的其他字段原样透传
    model_config = ConfigDict(extra="allow", frozen=True)

    type: VisualizationType
    title: Optional[str] = None
    xAxisKey: Optional[str] = None
    dataKey: Optional[str] = None
    description: Optional[str] = None


# --- LLM 输出结构 ---
class GeneratedQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    sql: str = Field(description="生成的 SQL 语句")
    explanation: str = Field(default="", description="给用户看的查询说明")
    visualization: Optional[Visualization] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_suggested_visualization(cls, data: Any):
        # 旧版 prompt 返回 "suggestedVisualization": "table|chart|number"
        if isinstance(data, dict) and not data.get("visualization"):
            suggested = data.get("suggestedVisualization")
            if isinstance(suggested, str) and suggested:
                data = {**data, "visualization": {"type": suggested}}
        return data

    @field_validator("sql")
    @classmethod
    def _sql_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("sql must be a non-empty string")
        return v

    @field_validator("explanation", mode="before")
    @classmethod
    def _explanation_default(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("visualization", mode="before")
    @classmethod
    def _drop_unknown_visualization(cls, v: Any):
        if v is None:
            return None
        try:
            return Visualization.model_validate(v)
        except ValueError as e:
            logger.warning(f"⚠️ Unsupported visualization from model, dropped: {v!r} ({e})")
            return None


class QueryOutcome(BaseModel):
    sql: str
    explanation: str
    visualization: Optional[Visualization] = None
    data: List[Dict[str, Any]]
    summary: str
    truncated: bool = False

    @property
    def row_count(self) -> int:
        return len(self.data)
