import re
from dataclasses import dataclass
from typing import Optional

# 禁用关键字 (单词边界，大小写不敏感)
DENY_KEYWORDS = [
    "INSERT", "UPDATE", "DELETE", "DROP", "ALTER", "TRUNCATE", "GRANT", "REVOKE",
    "EXEC", "EXECUTE", "CALL", "DECLARE", "SET",
]

FORBIDDEN_PATTERN = re.compile(rf"\b({'|'.join(DENY_KEYWORDS)})\b", re.IGNORECASE)

# CREATE 单独检查：只放行 CREATE TEMPORARY TABLE
CREATE_PATTERN = re.compile(r"\bCREATE\b", re.IGNORECASE)
TEMP_TABLE_PATTERN = re.compile(r"\bCREATE\s+TEMPORARY\s+TABLE\b", re.IGNORECASE)


@dataclass
class ValidationResult:
    safe: bool
    reason: Optional[str] = None


def _has_multiple_statements(sql: str) -> bool:
    # 允许末尾一个分号；按分号切分后超过一个非空片段即为多语句
    statements = [s for s in sql.split(";") if s.strip()]
    return len(statements) > 1


def is_query_safe(sql: str) -> ValidationResult:
    """
    关键字黑名单校验 (第一道防线，不解析 SQL)。
    字符串字面量里的关键字同样会被拦截，数据库账号本身也必须是只读 + 临时表权限。
    """
    if CREATE_PATTERN.search(sql) and not TEMP_TABLE_PATTERN.search(sql):
        return ValidationResult(False, "Only CREATE TEMPORARY TABLE is allowed, not permanent tables.")

    hit = FORBIDDEN_PATTERN.search(sql)
    if hit:
        return ValidationResult(False, f"Forbidden keyword detected: {hit.group(0).upper()}")

    if _has_multiple_statements(sql):
        return ValidationResult(False, "Multiple statements not allowed")

    return ValidationResult(True)


def sanitize_sql(sql: str) -> str:
    """去掉首尾空白和末尾的一个分号，不改写中间内容"""
    sql = sql.strip()
    if sql.endswith(";"):
        # "SELECT 1 ;" -> "SELECT 1"
        sql = sql[:-1].rstrip()
    return sql
