"""Integration tests for review endpoints."""

import pytest
from httpx import AsyncClient

from devcamper.auth import issue_token
from tests.factories import auth_headers
from tests.seeds import Seed

NEW_REVIEW = {"title": "Great instructors", "text": "Would recommend to anyone", "rating": 9}


@pytest.mark.asyncio
async def test_list_reviews(client: AsyncClient, seeded_db: Seed) -> None:
    resp = await client.get("/api/v1/reviews")
    body = resp.json()
    assert resp.status_code == 200
    assert body["count"] == 1
    [review] = body["data"]
    assert review["rating"] == 8
    assert review["userId"] == seeded_db.reviewer.id
    assert review["bootcamp"]["name"] == "Devworks Bootcamp"


@pytest.mark.asyncio
async def test_list_reviews_of_bootcamp_without_reviews(
    client: AsyncClient, seeded_db: Seed
) -> None:
    modern = seeded_db.bootcamps["ModernTech Bootcamp"]
    resp = await client.get(f"/api/v1/bootcamps/{modern.id}/reviews")
    assert resp.json() == {"success": True, "count": 0, "pagination": {}, "data": []}


@pytest.mark.asyncio
async def test_create_review_sets_average_rating(client: AsyncClient, seeded_db: Seed) -> None:
    modern = seeded_db.bootcamps["ModernTech Bootcamp"]
    resp = await client.post(
        f"/api/v1/bootcamps/{modern.id}/reviews",
        json=NEW_REVIEW,
        headers=auth_headers(seeded_db.reviewer),
    )
    assert resp.status_code == 201
    review = resp.json()["data"]
    assert review["bootcampId"] == modern.id
    assert review["userId"] == seeded_db.reviewer.id

    bootcamp = await client.get(f"/api/v1/bootcamps/{modern.id}")
    assert bootcamp.json()["data"]["averageRating"] == 9.0


@pytest.mark.asyncio
async def test_average_rating_is_rounded_to_one_decimal(
    client: AsyncClient, seeded_db: Seed
) -> None:
    devworks = seeded_db.bootcamps["Devworks Bootcamp"]
    for rating in (7, 10):
        resp = await client.post(
            "/api/v1/users",
            json={"name": f"Rater {rating}", "email": f"rater{rating}@gmail.com"},
        )
        rater_id = resp.json()["data"]["id"]
        token = {"Authorization": f"Bearer {issue_token(rater_id)}"}
        created = await client.post(
            f"/api/v1/bootcamps/{devworks.id}/reviews",
            json={**NEW_REVIEW, "rating": rating},
            headers=token,
        )
        assert created.status_code == 201

    # (8 + 7 + 10) / 3 = 8.333...
    bootcamp = await client.get(f"/api/v1/bootcamps/{devworks.id}")
    assert bootcamp.json()["data"]["averageRating"] == 8.3


@pytest.mark.asyncio
async def test_second_review_by_same_user_is_rejected(client: AsyncClient, seeded_db: Seed) -> None:
    devworks = seeded_db.bootcamps["Devworks Bootcamp"]
    resp = await client.post(
        f"/api/v1/bootcamps/{devworks.id}/reviews",
        json=NEW_REVIEW,
        headers=auth_headers(seeded_db.reviewer),
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Duplicate field value entered"}


@pytest.mark.asyncio
async def test_rating_out_of_range_is_rejected(client: AsyncClient, seeded_db: Seed) -> None:
    modern = seeded_db.bootcamps["ModernTech Bootcamp"]
    resp = await client.post(
        f"/api/v1/bootcamps/{modern.id}/reviews",
        json={**NEW_REVIEW, "rating": 11},
        headers=auth_headers(seeded_db.reviewer),
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "rating: Input should be less than or equal to 10"


@pytest.mark.asyncio
async def test_update_and_delete_review(client: AsyncClient, seeded_db: Seed) -> None:
    devworks_id = seeded_db.bootcamps["Devworks Bootcamp"].id
    listed = await client.get(f"/api/v1/bootcamps/{devworks_id}/reviews")
    review_id = listed.json()["data"][0]["id"]
    headers = auth_headers(seeded_db.reviewer)

    updated = await client.put(f"/api/v1/reviews/{review_id}", json={"rating": 4}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["rating"] == 4
    bootcamp = await client.get(f"/api/v1/bootcamps/{devworks_id}")
    assert bootcamp.json()["data"]["averageRating"] == 4.0

    deleted = await client.delete(f"/api/v1/reviews/{review_id}", headers=headers)
    assert deleted.status_code == 200
    assert (await client.get(f"/api/v1/reviews/{review_id}")).status_code == 404
    bootcamp = await client.get(f"/api/v1/bootcamps/{devworks_id}")
    assert bootcamp.json()["data"]["averageRating"] is None
