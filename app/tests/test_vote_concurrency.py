import asyncio

from sqlalchemy import func, select

from app.models.vote import Vote


async def test_concurrent_casts_for_same_slot_leave_one_vote(vote_ledger, db_session_factory, seeded_test_data):
    """
    Test: one user fires several votes for the same nomination at once.
    Expected: every request succeeds and exactly one row remains.
    """
    user_id = seeded_test_data["user_ids"][0]
    nomination_id = seeded_test_data["best_film_id"]
    candidate_ids = [seeded_test_data["alpha_id"], seeded_test_data["beta_id"]] * 2

    async def make_request(candidate_id):
        try:
            result = await vote_ledger.cast_vote(user_id, nomination_id, candidate_id)
            return {"success": True, "created": result.created}
        except Exception as e:
            return {"success": False, "error": str(e)}

    results = await asyncio.gather(*[make_request(c) for c in candidate_ids])

    failed = [r for r in results if not r["success"]]
    assert failed == [], f"Expected no failures. Results: {results}"

    async with db_session_factory() as session:
        rows = (await session.execute(
            select(Vote)
            .where(Vote.user_id == user_id)
            .where(Vote.nomination_id == nomination_id))).scalars().all()
    assert len(rows) == 1, f"Expected 1 vote row, got {len(rows)}"
    assert rows[0].candidate_id in candidate_ids


async def test_concurrent_votes_from_different_users(vote_ledger, db_session_factory, seeded_test_data):
    nomination_id = seeded_test_data["best_film_id"]
    user_ids = seeded_test_data["user_ids"]

    results = await asyncio.gather(*[
        vote_ledger.cast_vote(user_id, nomination_id, seeded_test_data["alpha_id"])
        for user_id in user_ids
    ])

    assert all(r.created for r in results)
    assert len({r.vote.id for r in results}) == len(user_ids)

    async with db_session_factory() as session:
        total = await session.scalar(
            select(func.count()).select_from(Vote).where(Vote.nomination_id == nomination_id))
    assert total == len(user_ids)
