import anyio
import anyio.to_thread
import httpx
import pytest

from conftest import TODAY


pytestmark = pytest.mark.anyio

WORKER_THREADS = 2


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def async_client(app):
    limiter = anyio.to_thread.current_default_thread_limiter()
    original_tokens = limiter.total_tokens
    limiter.total_tokens = WORKER_THREADS
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        limiter.total_tokens = original_tokens


async def send_concurrently(client, calls):
    responses = [None] * len(calls)

    async def send(index, method, url, payload):
        responses[index] = await client.request(method, url, json=payload)

    with anyio.fail_after(15):
        async with anyio.create_task_group() as task_group:
            for index, (method, url, payload) in enumerate(calls):
                task_group.start_soon(send, index, method, url, payload)
    return responses


async def test_more_requests_than_worker_threads_all_complete(async_client):
    calls = [("POST", "/api/notes", {"title": f"note {n}"}) for n in range(WORKER_THREADS * 3)]
    calls += [("GET", "/api/notes", None) for _ in range(WORKER_THREADS * 3)]

    responses = await send_concurrently(async_client, calls)

    assert [r.status_code for r in responses[:WORKER_THREADS * 3]] == [201] * (WORKER_THREADS * 3)
    assert all(r.status_code == 200 for r in responses[WORKER_THREADS * 3:])
    assert len((await async_client.get("/api/notes")).json()) == WORKER_THREADS * 3


async def test_concurrent_upserts_for_one_day_leave_a_single_log(async_client):
    habit = (await async_client.post("/api/habits", json={"name": "Stretch"})).json()
    calls = [
        ("POST", "/api/habit-logs", {"habitId": habit["id"], "date": TODAY.isoformat(), "completed": n % 2 == 0})
        for n in range(10)
    ]

    responses = await send_concurrently(async_client, calls)

    assert all(r.status_code == 201 for r in responses)
    assert len({r.json()["id"] for r in responses}) == 1

    logs = (await async_client.get(f"/api/habits/{habit['id']}/logs")).json()
    assert len(logs) == 1

    refreshed = (await async_client.get(f"/api/habits/{habit['id']}")).json()
    expected = 1 if logs[0]["completed"] else 0
    assert refreshed["currentStreak"] == expected
    assert refreshed["longestStreak"] == expected


async def test_concurrent_item_writes_keep_checklist_progress_consistent(async_client):
    checklist = (await async_client.post("/api/checklists", json={"title": "Trip"})).json()
    calls = [
        ("POST", "/api/checklist-items", {"checklistId": checklist["id"], "title": f"item {n}", "completed": n < 4, "order": n})
        for n in range(5)
    ]

    responses = await send_concurrently(async_client, calls)

    assert all(r.status_code == 201 for r in responses)
    refreshed = (await async_client.get(f"/api/checklists/{checklist['id']}")).json()
    assert [item["order"] for item in refreshed["items"]] == [0, 1, 2, 3, 4]
    assert refreshed["progress"] == 80
