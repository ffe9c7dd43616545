"""Admin analytics endpoint."""

from httpx import AsyncClient


async def test_task_stats(
    api_client: AsyncClient, admin_headers, manager_headers, seed
) -> None:
    for task_type, account, manager in (
        ("agreement", seed.account, seed.manager),
        ("new_account", seed.account, seed.manager),
        ("review", seed.other_account, seed.other_manager),
    ):
        response = await api_client.post(
            "/api/v1/tasks",
            headers=admin_headers,
            json={
                "task_type": task_type,
                "client_account_id": account.id,
                "manager_id": manager.id,
            },
        )
        assert response.status_code == 201
    mine = (await api_client.get("/api/v1/tasks/mine", headers=manager_headers)).json()
    agreement = next(t for t in mine if t["task_type"] == "agreement")
    url = f"/api/v1/tasks/{agreement['id']}/status"
    for target in ("in_progress", "agreement_done", "waiting_for_review", "review_done", "closed"):
        assert (
            await api_client.post(url, headers=manager_headers, json={"status": target})
        ).status_code == 200
    new_account = next(t for t in mine if t["task_type"] == "new_account")
    await api_client.post(
        f"/api/v1/tasks/{new_account['id']}/status",
        headers=manager_headers,
        json={"status": "in_progress"},
    )

    response = await api_client.get("/api/v1/analytics/tasks", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total_tasks"] == 3
    assert data["closed_tasks"] == 1
    assert data["in_progress_tasks"] == 1
    assert data["new_tasks"] == 1
    assert data["average_completion_days"] > 0
    assert data["tasks_by_type"] == {"agreement": 1, "new_account": 1, "review": 1}
    by_manager = {m["manager_id"]: m for m in data["tasks_by_manager"]}
    assert by_manager[seed.manager.id] == {
        "manager_id": seed.manager.id,
        "manager_name": "Mia Manager",
        "total": 2,
        "closed": 1,
    }
    assert by_manager[seed.other_manager.id]["closed"] == 0


async def test_empty_stats(api_client: AsyncClient, admin_headers, seed) -> None:
    data = (await api_client.get("/api/v1/analytics/tasks", headers=admin_headers)).json()
    assert data["total_tasks"] == 0
    assert data["average_completion_days"] == 0.0
    assert data["tasks_by_manager"] == []


async def test_stats_require_admin(api_client: AsyncClient, manager_headers, seed) -> None:
    response = await api_client.get("/api/v1/analytics/tasks", headers=manager_headers)
    assert response.status_code == 403
