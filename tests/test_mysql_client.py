import re

import pytest

from brnd_intelligence.infrastructure.db.mysql import MySQLClient

TEMP_TABLE = re.compile(r"CREATE\s+TEMPORARY\s+TABLE\s+(\w+)", re.IGNORECASE)


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.closed = False
        self.fetch_sizes = []

    def execute(self, sql):
        self.conn.executed.append(sql)
        if self.conn.error:
            raise self.conn.error
        match = TEMP_TABLE.search(sql)
        if match:
            # 临时表按 session 记录，同名重复创建报 1050
            name = match.group(1)
            if name in self.conn.temp_tables:
                raise ValueError(f"(1050, \"Table '{name}' already exists\")")
            self.conn.temp_tables.add(name)

    def fetchmany(self, size):
        self.fetch_sizes.append(size)
        return tuple(self.conn.rows[:size])

    def close(self):
        self.closed = True


class FakeSession:
    """One MySQL session: temp tables live until the session is closed."""

    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.executed = []
        self.temp_tables = set()
        self.cursors = []
        self.closed = False

    def cursor(self):
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur

    def close(self):
        self.closed = True
        self.temp_tables.clear()


class PooledHandle:
    """Mimics PooledDB: close() returns the session to the pool without ending it."""

    def __init__(self, pool, session):
        self.pool = pool
        self.session = session

    def cursor(self):
        return self.session.cursor()

    def close(self):
        self.pool.returned += 1


class FakePool:
    def __init__(self, session):
        self.session = session
        self.checked_out = 0
        self.returned = 0
        self.closed = False

    def connection(self):
        self.checked_out += 1
        return PooledHandle(self, self.session)

    def close(self):
        self.closed = True


@pytest.fixture
def pooled():
    return FakeSession(rows=[{"id": i} for i in range(10)])


@pytest.fixture
def dedicated():
    sessions = []

    def connect():
        session = FakeSession()
        sessions.append(session)
        return session

    connect.sessions = sessions
    return connect


def test_fetches_one_row_past_the_cap(pooled, dedicated):
    pool = FakePool(pooled)
    client = MySQLClient(pool, fetch_limit=4, connect=dedicated)

    rows = client.query_raw("SELECT id FROM brands")

    assert rows == [{"id": 0}, {"id": 1}, {"id": 2}, {"id": 3}]
    assert isinstance(rows, list)
    assert pooled.cursors[0].fetch_sizes == [4]
    assert pooled.cursors[0].closed is True
    assert pool.returned == 1
    assert dedicated.sessions == []


def test_cursor_and_connection_released_when_execute_fails(dedicated):
    session = FakeSession(error=RuntimeError("(1054, \"Unknown column 'nope'\")"))
    pool = FakePool(session)
    client = MySQLClient(pool, fetch_limit=4, connect=dedicated)

    with pytest.raises(RuntimeError, match="Unknown column"):
        client.query_raw("SELECT nope FROM brands")

    assert session.cursors[0].closed is True
    assert pool.returned == 1


def test_temporary_tables_do_not_outlive_the_request(pooled, dedicated):
    pool = FakePool(pooled)
    client = MySQLClient(pool, fetch_limit=4, connect=dedicated)

    client.query_raw("CREATE TEMPORARY TABLE t AS SELECT 1")
    # same statement again must not see the first request's table
    client.query_raw("CREATE TEMPORARY TABLE t AS SELECT 1")

    assert pool.checked_out == 0
    assert pooled.temp_tables == set()
    assert len(dedicated.sessions) == 2
    assert all(s.closed for s in dedicated.sessions)


def test_close_shuts_the_pool(pooled, dedicated):
    pool = FakePool(pooled)

    MySQLClient(pool, connect=dedicated).close()

    assert pool.closed is True
