import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from brnd_intelligence.api.v1.intelligence import get_intelligence_service
from brnd_intelligence.modules.sql.executor import QueryExecutor
from brnd_intelligence.services.intelligence_service import IntelligenceService
from brnd_intelligence.services.sql_generator import SQLGenerator
from brnd_intelligence.services.summarizer import ResultSummarizer
from main import app
from tests.fakes import FakeDB, FakeLLM


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_db():
    return FakeDB()


@pytest.fixture
def service(fake_llm, fake_db):
    return IntelligenceService(
        generator=SQLGenerator(fake_llm),
        executor=QueryExecutor(fake_db, timeout_s=2, max_rows=1000),
        summarizer=ResultSummarizer(fake_llm),
    )


# Client with the real router and an injected service
@pytest_asyncio.fixture(scope="function")
async def client(service):
    app.dependency_overrides[get_intelligence_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
