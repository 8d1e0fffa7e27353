import os
from dotenv import load_dotenv

# 加载 .env
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
load_dotenv(os.path.join(project_root, ".env"))


class Settings:
    # MySQL 配置 (只读 + CREATE TEMPORARY TABLES 权限的账号)
    MYSQL_HOST = os.getenv("MYSQL_HOST", "127.0.0.1")
    MYSQL_PORT = int(os.getenv("MYSQL_PORT", 3306))
    MYSQL_USER = os.getenv("MYSQL_USER", "brnd_readonly")
    MYSQL_PASSWORD = os.getenv("MYSQL_PASSWORD")
    MYSQL_DATABASE = os.getenv("MYSQL_DATABASE", "brnd")
    MYSQL_POOL_MAX = int(os.getenv("MYSQL_POOL_MAX", "20"))

    # SQL 执行超时时间 (秒)
    SQL_TIMEOUT_S = float(os.getenv("SQL_TIMEOUT_S", "10"))

    # 结果集最大行数限制，默认 1000行
    RESULT_MAX_ROWS = int(os.getenv("RESULT_MAX_ROWS", "1000"))

    # LLM 配置 (OpenAI 兼容接口)
    LLM_API_KEY = os.getenv("LLM_API_KEY", "")
    LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.openai.com/v1")
    LLM_MODEL = os.getenv("LLM_MODEL_NAME", "gpt-4o-mini")
    LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))

    # 总结语言 (面向运营团队)
    SUMMARY_LANGUAGE = os.getenv("SUMMARY_LANGUAGE", "Spanish")

    # 审计日志，留空则关闭
    AUDIT_LOG_PATH = os.getenv("AUDIT_LOG_PATH", os.path.join(project_root, "logs", "events.jsonl"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
