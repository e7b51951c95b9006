import pytest
from httpx import AsyncClient


@pytest.mark.anyio("asyncio")
async def test_shift_api_generate_and_delete(api_client: AsyncClient) -> None:
    create_response = await api_client.post(
        "/api/shifts/generate", json={"start_date": "2025-12-01", "end_date": "2025-12-07"}
    )
    assert create_response.status_code == 201
    created = create_response.json()
    assert len(created) == 21
    assert created[0]["start_time"] == "06:30"
    assert created[0]["assigned_staff_id"] is None

    list_response = await api_client.get("/api/shifts/")
    assert list_response.status_code == 200
    shifts = list_response.json()
    assert len(shifts) == 21
    assert shifts[0]["date"] == "2025-12-01"
    assert shifts[-1]["date"] == "2025-12-07"

    delete_response = await api_client.delete(f"/api/shifts/{shifts[0]['id']}")
    assert delete_response.status_code == 204

    missing_response = await api_client.delete(f"/api/shifts/{shifts[0]['id']}")
    assert missing_response.status_code == 404

    clear_response = await api_client.delete("/api/shifts/")
    assert clear_response.status_code == 204

    list_after_clear = await api_client.get("/api/shifts/")
    assert list_after_clear.json() == []


@pytest.mark.anyio("asyncio")
async def test_regenerating_a_range_replaces_only_that_range(api_client: AsyncClient) -> None:
    await api_client.post(
        "/api/shifts/generate", json={"start_date": "2025-12-01", "end_date": "2025-12-03"}
    )
    first_ids = {shift["id"] for shift in (await api_client.get("/api/shifts/")).json()}

    await api_client.post(
        "/api/shifts/generate", json={"start_date": "2025-12-03", "end_date": "2025-12-04"}
    )
    shifts = (await api_client.get("/api/shifts/")).json()

    assert len(shifts) == 12
    kept = {shift["id"] for shift in shifts if shift["date"] < "2025-12-03"}
    assert kept <= first_ids
    assert len(kept) == 6
    replaced = {shift["id"] for shift in shifts if shift["date"] == "2025-12-03"}
    assert replaced.isdisjoint(first_ids)


@pytest.mark.anyio("asyncio")
async def test_generate_rejects_inverted_range(api_client: AsyncClient) -> None:
    response = await api_client.post(
        "/api/shifts/generate", json={"start_date": "2025-12-31", "end_date": "2025-12-01"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Start date cannot be after end date"
