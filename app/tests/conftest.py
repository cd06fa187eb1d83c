import pytest
from httpx import ASGITransport, AsyncClient

from app.app import attach_services, create_app
from app.core.config import Settings
from app.core.security import create_access_token, hash_password
from app.db.core import Database
from app.models import Candidate, Nomination, User
from app.services.catalog import CatalogStore
from app.services.vote_ledger import VoteLedger


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        ENV="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'premia_test.db'}",
        SECRET_KEY="test-secret",
        RESULTS_REVEAL_AT=None,
        LOCK_VOTING_AFTER_REVEAL=False,
    )


@pytest.fixture
async def database(test_settings):
    """A fresh SQLite file database per test, created in the test's event loop."""
    database = Database(test_settings.DATABASE_URL)
    await database.init_db()
    yield database
    await database.dispose()


@pytest.fixture
def db_session_factory(database):
    return database.session_factory


@pytest.fixture
def catalog(db_session_factory):
    return CatalogStore(db_session_factory)


@pytest.fixture
def vote_ledger(db_session_factory, catalog):
    return VoteLedger(db_session_factory, catalog)


@pytest.fixture
async def seeded_test_data(db_session_factory):
    """
    Two active nominations and one inactive, three voters and an admin.

    best_film: Alpha, Beta     best_song: Gamma     archived: Delta (inactive)
    """
    async with db_session_factory() as session:
        users = [
            User(username=f"voter{i}", password_hash=hash_password("secret1"),
                 display_name=f"Voter {i}")
            for i in range(1, 4)
        ]
        admin = User(username="admin", password_hash=hash_password("secret1"),
                     display_name="Admin", is_admin=True)
        session.add_all(users + [admin])

        best_film = Nomination(name="Best Film", description="Film of the year")
        best_song = Nomination(name="Best Song")
        archived = Nomination(name="Archived", is_active=False)
        session.add_all([best_film, best_song, archived])
        await session.flush()

        alpha = Candidate(nomination_id=best_film.id, name="Alpha")
        beta = Candidate(nomination_id=best_film.id, name="Beta")
        gamma = Candidate(nomination_id=best_song.id, name="Gamma")
        delta = Candidate(nomination_id=archived.id, name="Delta")
        session.add_all([alpha, beta, gamma, delta])
        await session.flush()
        await session.commit()

        yield {
            "user_ids": [user.id for user in users],
            "admin_id": admin.id,
            "best_film_id": best_film.id,
            "best_song_id": best_song.id,
            "archived_id": archived.id,
            "alpha_id": alpha.id,
            "beta_id": beta.id,
            "gamma_id": gamma.id,
            "delta_id": delta.id,
        }


@pytest.fixture
def make_app(database, test_settings):
    """Build an app wired to the test database; lifespan is not run by ASGITransport."""
    def _make_app(**overrides):
        settings = test_settings.model_copy(update=overrides)
        app = create_app(settings)
        attach_services(app, database, settings)
        return app
    return _make_app


@pytest.fixture
async def client(make_app):
    app = make_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(test_settings):
    def _auth_headers(user_id: int):
        token = create_access_token(
            subject=str(user_id),
            secret_key=test_settings.SECRET_KEY,
            algorithm=test_settings.ALGORITHM,
            expires_minutes=5,
        )
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers
