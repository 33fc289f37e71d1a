import pytest

from devcamper.auth import authenticate, issue_token, verify_token
from devcamper.exceptions import UnauthorizedError
from tests.seeds import Seed

USER_ID = "5d7a514b5d2c12c7449be042"


def test_token_round_trip() -> None:
    token = issue_token(USER_ID, secret="s3cret")
    assert token.startswith(f"{USER_ID}.")
    assert verify_token(token, secret="s3cret") == USER_ID


@pytest.mark.parametrize(
    "token",
    [
        issue_token(USER_ID, secret="other"),
        f"{USER_ID}.",
        USER_ID,
        "not-an-id." + "0" * 64,
        "",
    ],
    ids=["wrong_secret", "empty_signature", "no_signature", "bad_user_id", "empty"],
)
def test_verify_rejects(token: str) -> None:
    assert verify_token(token, secret="s3cret") is None


@pytest.mark.asyncio
async def test_authenticate_returns_user(seeded_db: Seed) -> None:
    header = f"Bearer {issue_token(seeded_db.publisher.id)}"
    user = await authenticate(seeded_db.db, header)
    assert user.id == seeded_db.publisher.id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header",
    [None, "", "Basic abc", "Bearer ", f"Bearer {issue_token(USER_ID)}"],
    ids=["missing", "empty", "wrong_scheme", "no_token", "unknown_user"],
)
async def test_authenticate_rejects(seeded_db: Seed, header: str | None) -> None:
    with pytest.raises(UnauthorizedError, match="Not authorized to access this route"):
        await authenticate(seeded_db.db, header)
