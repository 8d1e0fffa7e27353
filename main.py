import time
from contextlib import asynccontextmanager
from fastapi import FastAPI

# 引入路由
from brnd_intelligence.api.v1.intelligence import router as intelligence_router

from brnd_intelligence.core.config import settings
from brnd_intelligence.core.llm import LLMClient
from brnd_intelligence.core.logger import logger
from brnd_intelligence.infrastructure.db.mysql import MySQLClient, create_pool
from brnd_intelligence.modules.sql.executor import QueryExecutor
from brnd_intelligence.services.intelligence_service import IntelligenceService
from brnd_intelligence.services.sql_generator import SQLGenerator
from brnd_intelligence.services.summarizer import ResultSummarizer


def build_intelligence_service(db, llm) -> IntelligenceService:
    """把客户端显式注入各个组件 (不用模块级单例)"""
    executor = QueryExecutor(
        db,
        timeout_s=settings.SQL_TIMEOUT_S,
        max_rows=settings.RESULT_MAX_ROWS,
        audit_path=settings.AUDIT_LOG_PATH or None,
    )
    return IntelligenceService(
        generator=SQLGenerator(llm),
        executor=executor,
        summarizer=ResultSummarizer(llm, language=settings.SUMMARY_LANGUAGE),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🔥 [Startup] System is warming up...")
    t0 = time.perf_counter()

    # ===========================
    # 1. 初始化 MySQL 连接池 + LLM 客户端
    # ===========================
    db = MySQLClient(create_pool())
    llm = LLMClient()
    app.state.intelligence_service = build_intelligence_service(db, llm)

    elapsed = time.perf_counter() - t0
    logger.info(f"✅ [Startup] Ready! Took {elapsed:.2f}s (model={llm.model})")

    yield

    # ===========================
    # 2. 关闭资源
    # ===========================
    logger.info("🛑 [Shutdown] Closing MySQL pool...")
    db.close()


app = FastAPI(title="brnd-intelligence", lifespan=lifespan)

# 注册路由
app.include_router(intelligence_router)


@app.get("/health")
def health():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    import os

    # 只有开发时显式开启才会热重载
    is_reload = os.getenv("UVICORN_RELOAD", "False").lower() == "true"

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=is_reload,
    )
