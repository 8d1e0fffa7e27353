import pytest
from httpx import AsyncClient

from tests.fakes import generated

URL = "/api/intelligence/query"
TOP3_SQL = "SELECT name, score FROM brands ORDER BY score DESC LIMIT 3"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"question": ""}, {"question": "   "}, {"question": 42}, ["top brands"]])
async def test_invalid_question_is_rejected(client: AsyncClient, fake_llm, fake_db, body):
    """Missing / non-string question -> 400, no upstream calls"""
    response = await client.post(URL, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Question is required"}
    assert fake_llm.calls == []
    assert fake_db.calls == []


@pytest.mark.asyncio
async def test_leaderboard_uses_fast_path(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(generated(TOP3_SQL, "Top 3 brands", {"type": "leaderboard"}))
    fake_db.result = [
        {"name": "base", "score": 1200},
        {"name": "floc", "score": 900},
        {"name": "zora", "score": 850},
    ]

    response = await client.post(URL, json={"question": "top 3 brands this week"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["sql"] == TOP3_SQL
    assert data["visualization"] == {"type": "leaderboard"}
    assert data["rowCount"] == 3
    assert data["summary"].splitlines()[1:] == ["1. base (1200 pts)", "2. floc (900 pts)", "3. zora (850 pts)"]
    # only the generation call hit the completion service
    assert len(fake_llm.calls) == 1
    assert fake_db.calls == [TOP3_SQL]


@pytest.mark.asyncio
async def test_quota_error_maps_to_503(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(RuntimeError("Error code: 429 - You exceeded your current quota"))

    response = await client.post(URL, json={"question": "top 3 brands this week"})

    assert response.status_code == 503
    assert response.json()["error"].startswith("AI Service Error:")
    assert "quota" in response.json()["error"]
    assert fake_db.calls == []


@pytest.mark.asyncio
async def test_unsafe_sql_is_rejected_without_touching_database(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(generated("DROP TABLE brands", "Removes brands"))

    response = await client.post(URL, json={"question": "remove all brands"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "Forbidden keyword detected: DROP",
        "sql": "DROP TABLE brands",
        "explanation": "Removes brands",
    }
    assert fake_db.calls == []


@pytest.mark.asyncio
async def test_database_error_maps_to_400_without_summary(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(generated("SELECT nope FROM brands", "Broken column"))
    fake_db.error = RuntimeError("(1054, \"Unknown column 'nope' in 'field list'\")")

    response = await client.post(URL, json={"question": "show me nope"})

    assert response.status_code == 400
    data = response.json()
    assert "Unknown column" in data["error"]
    assert data["sql"] == "SELECT nope FROM brands"
    assert data["explanation"] == "Broken column"
    # summarization is not attempted
    assert len(fake_llm.calls) == 1


@pytest.mark.asyncio
async def test_wide_integers_serialized_as_strings(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(generated("SELECT blockNumber FROM airdrops", "Block numbers", {"type": "table"}), "Un bloque.")
    fake_db.result = [{"blockNumber": 123456789012345678, "votes": 7}]

    response = await client.post(URL, json={"question": "latest airdrop block"})

    assert response.status_code == 200
    assert response.json()["data"] == [{"blockNumber": "123456789012345678", "votes": 7}]
    assert '"blockNumber":"123456789012345678"' in response.text


@pytest.mark.asyncio
async def test_general_summary_path(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(
        generated("SELECT DATE(date) AS vote_date, COUNT(*) AS votes FROM user_brand_votes GROUP BY DATE(date)",
                  "Votes per day", {"type": "line", "xAxisKey": "vote_date", "dataKey": "votes"}),
        "Los votos crecieron.",
    )
    fake_db.result = [{"vote_date": "2025-03-01", "votes": 10}, {"vote_date": "2025-03-02", "votes": 12}]

    response = await client.post(URL, json={"question": "votes per day"})

    assert response.status_code == 200
    data = response.json()
    assert data["summary"] == "Los votos crecieron."
    assert data["visualization"] == {"type": "line", "xAxisKey": "vote_date", "dataKey": "votes"}
    assert data["rowCount"] == 2
    assert data["truncated"] is False
    assert "QUESTION: votes per day" in fake_llm.calls[1]["prompt"]


@pytest.mark.asyncio
async def test_summary_failure_does_not_fail_request(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(generated("SELECT COUNT(*) AS total FROM users", "Counts users"), RuntimeError("timeout"))
    fake_db.result = [{"total": 5}]

    response = await client.post(URL, json={"question": "how many users?"})

    assert response.status_code == 200
    assert response.json()["summary"] == "Se encontraron 1 resultados. Counts users"


@pytest.mark.asyncio
async def test_analysis_post_path(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(
        generated("SELECT b.name FROM brands b LIMIT 10", "Weekly analysis", {"type": "analysis_post"}),
        "BRND Weekly 22-23 Leaderboard Evolution",
    )
    fake_db.result = [{"name": "base", "currentScore": 100}]

    response = await client.post(URL, json={"question": "Weekly leaderboard analysis Round 23 vs Round 22"})

    assert response.status_code == 200
    assert response.json()["summary"] == "BRND Weekly 22-23 Leaderboard Evolution"
    assert fake_llm.calls[1]["system"].startswith("You are a professional content writer")


@pytest.mark.asyncio
async def test_empty_leaderboard_falls_back_to_general_summary(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue(generated(TOP3_SQL, "Top 3 brands", {"type": "leaderboard"}), "No hay marcas.")
    fake_db.result = []

    response = await client.post(URL, json={"question": "top 3 brands this week"})

    assert response.status_code == 200
    assert response.json()["summary"] == "No hay marcas."
    assert response.json()["rowCount"] == 0


@pytest.mark.asyncio
async def test_unparseable_generation_is_500(client: AsyncClient, fake_llm, fake_db):
    fake_llm.queue("I cannot answer that")

    response = await client.post(URL, json={"question": "???"})

    assert response.status_code == 500
    assert "error" in response.json()
    assert fake_db.calls == []


def test_ai_service_error_classification():
    from brnd_intelligence.api.v1.intelligence import _is_ai_service_error
    from brnd_intelligence.core.errors import GenerationParseError, GenerationServiceError

    assert _is_ai_service_error(GenerationServiceError("Failed to generate SQL: Connection error."))
    assert _is_ai_service_error(RuntimeError("Incorrect API key provided"))
    assert _is_ai_service_error(RuntimeError("The model `gpt-x` does not exist"))
    assert not _is_ai_service_error(GenerationParseError("No response from model"))
    assert not _is_ai_service_error(RuntimeError("division by zero"))
