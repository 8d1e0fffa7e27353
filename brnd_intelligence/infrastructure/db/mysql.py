from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional

import pymysql
# 引入连接池模块
from dbutils.pooled_db import PooledDB

from brnd_intelligence.core.config import settings
from brnd_intelligence.modules.sql.guardrail import TEMP_TABLE_PATTERN


def connection_kwargs() -> Dict[str, Any]:
    """透传给 pymysql.connect 的参数 (连接池和独占连接共用)"""
    return dict(
        host=settings.MYSQL_HOST,
        port=settings.MYSQL_PORT,
        user=settings.MYSQL_USER,
        password=settings.MYSQL_PASSWORD,
        database=settings.MYSQL_DATABASE,
        charset="utf8mb4",
        cursorclass=pymysql.cursors.DictCursor,
        autocommit=True,

        # 超时设置 (秒)：connect_timeout 是建连超时，read_timeout 兜住慢查询
        connect_timeout=10,
        read_timeout=max(1, int(settings.SQL_TIMEOUT_S)),
        write_timeout=max(1, int(settings.SQL_TIMEOUT_S)),
    )


def create_pool(max_connections: Optional[int] = None) -> PooledDB:
    """
    创建连接池，由 main.py 的 lifespan 调用 (不在 import 时建连)。
    注意：账号只能有 SELECT + CREATE TEMPORARY TABLES 权限，guardrail 只是软件层防线。
    """
    return PooledDB(
        creator=pymysql,  # 使用 pymysql 库
        maxconnections=max_connections or settings.MYSQL_POOL_MAX,
        mincached=1,  # 初始化时至少创建的空闲连接
        maxcached=5,  # 连接池中最多闲置的连接
        maxshared=0,  # 0 表示所有连接都不共享
        blocking=True,  # 连接池满了阻塞等待
        **connection_kwargs(),
    )


def open_connection():
    """不经过连接池的独占连接，close() 时 session 真正结束"""
    return pymysql.connect(**connection_kwargs())


class MySQLClient:
    """只负责执行单条原始 SQL，返回 dict 行列表"""

    def __init__(self, pool: PooledDB, fetch_limit: Optional[int] = None,
                 connect: Optional[Callable[[], Any]] = None):
        self.pool = pool
        self.connect = connect or open_connection
        # 多取一行，由 executor 判断是否截断
        self.fetch_limit = fetch_limit or settings.RESULT_MAX_ROWS + 1

    @contextmanager
    def connection(self, dedicated: bool = False):
        """
        默认从连接池获取连接，使用完毕后归还（而不是断开）。
        dedicated=True 时新建独占连接，用完直接断开。

        Usage:
            with client.connection() as conn:
                cur = conn.cursor()
                cur.execute(...)
        """
        conn = self.connect() if dedicated else self.pool.connection()
        try:
            yield conn
        finally:
            # PooledDB 中 .close() 是重置状态并放回池中；独占连接则是断开
            conn.close()

    def query_raw(self, sql: str) -> List[Dict[str, Any]]:
        # 临时表挂在 session 上，放回连接池会泄漏给下一个请求
        dedicated = bool(TEMP_TABLE_PATTERN.search(sql))
        with self.connection(dedicated=dedicated) as conn:
            cur = conn.cursor()
            try:
                cur.execute(sql)
                # CREATE TEMPORARY TABLE 没有结果集，fetchmany 返回 ()
                rows = cur.fetchmany(self.fetch_limit)
            finally:
                cur.close()
        return list(rows)

    def close(self):
        self.pool.close()
