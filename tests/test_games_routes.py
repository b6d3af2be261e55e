"""
End-to-end route tests for /api/v1/games (app/api/v1/routers/games.py)

    POST   /games                 — create (201 / 400)
    GET    /games                 — list with genre / plateforme / termine filters
    GET    /games/export          — download of the whole collection
    GET    /games/{id}            — read (200 / 400 / 404)
    PUT    /games/{id}            — full replacement (200 / 400 / 404)
    DELETE /games/{id}            — hard delete (204 / 400 / 404)
    POST   /games/{id}/favorite   — favorite toggle (200 / 400 / 404)

All tests use FastAPI TestClient with the client fixture from conftest.py.
"""
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.api.v1.dependencies import get_game_service
from app.features.games.validation import BODY_ERROR, GENRE_ERROR, PLATEFORME_ERROR, TITRE_ERROR
from app.main import INVALID_JSON_ERROR


def _create(client, api, **fields):
    payload = {"titre": "Hades", "genre": ["Action"], "plateforme": ["PC"]}
    payload.update(fields)
    res = client.post(f"{api}/games", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


def _ts(value):
    """Parse an API timestamp (pydantic writes UTC as 'Z')."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestCreateGame:
    def test_hades_scenario(self, client, api):
        body = _create(client, api)
        assert isinstance(body["id"], str)
        assert body["titre"] == "Hades"
        assert body["genre"] == ["Action"]
        assert body["plateforme"] == ["PC"]
        assert body["editeur"] == ""
        assert body["developpeur"] == ""
        assert body["annee_sortie"] is None
        assert body["metacritic_score"] is None
        assert body["temps_jeu_heures"] == 0
        assert body["termine"] is False
        assert body["favorite"] is False
        assert body["date_ajout"] == body["date_modification"]

    def test_timestamps_are_utc(self, client, api):
        body = _create(client, api)
        stamp = _ts(body["date_ajout"])
        assert stamp.tzinfo is not None
        assert stamp.utcoffset().total_seconds() == 0

    def test_validation_errors(self, client, api):
        res = client.post(f"{api}/games", json={"metacritic_score": 120})
        assert res.status_code == 400
        assert res.json() == {"errors": [
            TITRE_ERROR,
            GENRE_ERROR,
            PLATEFORME_ERROR,
            '"metacritic_score" doit être entre 0 et 100.',
        ]}

    def test_non_object_body(self, client, api):
        res = client.post(f"{api}/games", json=["Hades"])
        assert res.status_code == 400
        assert res.json() == {"errors": [BODY_ERROR]}

    def test_missing_body(self, client, api):
        res = client.post(f"{api}/games")
        assert res.status_code == 400
        assert res.json() == {"errors": [BODY_ERROR]}

    def test_unparsable_body(self, client, api):
        res = client.post(
            f"{api}/games",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert res.status_code == 400
        assert res.json() == {"errors": [INVALID_JSON_ERROR]}

    def test_overflowing_play_time_rejected(self, client, api):
        res = client.post(
            f"{api}/games",
            content=b'{"titre": "Hades", "genre": ["Action"], "plateforme": ["PC"], "temps_jeu_heures": 1e400}',
            headers={"Content-Type": "application/json"},
        )
        assert res.status_code == 400
        assert res.json() == {"errors": ['"temps_jeu_heures" doit être un nombre.']}
        assert client.get(f"{api}/stats").json()["totalPlayTime"] == 0

    def test_created_game_is_readable(self, client, api):
        created = _create(client, api, metacritic_score=93, annee_sortie=2020)
        res = client.get(f"{api}/games/{created['id']}")
        assert res.status_code == 200
        assert res.json() == created


class TestListGames:
    def test_empty(self, client, api):
        res = client.get(f"{api}/games")
        assert res.status_code == 200
        assert res.json() == []

    def test_newest_first(self, client, api):
        a = _create(client, api, titre="A")
        b = _create(client, api, titre="B")
        ids = [g["id"] for g in client.get(f"{api}/games").json()]
        assert ids == [b["id"], a["id"]]

    def test_filters(self, client, api):
        _create(client, api, titre="Zelda", genre=["Aventure"], plateforme=["Switch"], termine=True)
        _create(client, api, titre="Doom", genre=["FPS"], plateforme=["PC"])

        def titles(**params):
            res = client.get(f"{api}/games", params=params)
            assert res.status_code == 200
            return [g["titre"] for g in res.json()]

        assert titles(genre="Aventure") == ["Zelda"]
        assert titles(plateforme="PC") == ["Doom"]
        assert titles(termine="true") == ["Zelda"]
        assert titles(termine="false") == ["Doom"]
        assert titles(genre="FPS", plateforme="Switch") == []
        # toute valeur autre que "true" désigne les jeux non terminés
        assert titles(termine="foo") == ["Doom"]
        assert titles(genre="") == ["Doom", "Zelda"]


class TestExport:
    def test_attachment(self, client, api, settings):
        _create(client, api)
        res = client.get(f"{api}/games/export")
        assert res.status_code == 200
        assert res.headers["content-disposition"] == f'attachment; filename="{settings.EXPORT_FILENAME}"'
        body = res.json()
        assert len(body) == 1
        assert body[0]["titre"] == "Hades"


class TestSingleGame:
    @pytest.mark.parametrize("method,suffix", [
        ("get", ""),
        ("delete", ""),
        ("post", "/favorite"),
    ])
    def test_malformed_id(self, client, api, method, suffix):
        res = getattr(client, method)(f"{api}/games/not-an-id{suffix}")
        assert res.status_code == 400
        assert res.json() == {"error": "ID invalide"}

    @pytest.mark.parametrize("method,suffix", [
        ("get", ""),
        ("delete", ""),
        ("post", "/favorite"),
    ])
    def test_unknown_id(self, client, api, method, suffix):
        res = getattr(client, method)(f"{api}/games/424242{suffix}")
        assert res.status_code == 404
        assert res.json() == {"error": "Jeu non trouvé"}

    def test_put_malformed_and_unknown(self, client, api):
        payload = {"titre": "X", "genre": ["Y"], "plateforme": ["Z"]}
        assert client.put(f"{api}/games/abc", json=payload).status_code == 400
        assert client.put(f"{api}/games/31337", json=payload).status_code == 404


class TestUpdateGame:
    def test_replace(self, client, api):
        created = _create(client, api, editeur="Supergiant")
        res = client.put(f"{api}/games/{created['id']}", json={
            "titre": "Hades II",
            "genre": ["Roguelike"],
            "plateforme": ["PC", "Switch"],
            "temps_jeu_heures": 0,
            "termine": True,
        })
        assert res.status_code == 200
        body = res.json()
        assert body["id"] == created["id"]
        assert body["titre"] == "Hades II"
        assert body["plateforme"] == ["PC", "Switch"]
        assert body["editeur"] == ""
        assert body["termine"] is True
        assert body["date_ajout"] == created["date_ajout"]
        assert _ts(body["date_modification"]) > _ts(created["date_modification"])

    def test_validation_errors(self, client, api):
        created = _create(client, api)
        res = client.put(f"{api}/games/{created['id']}", json={"titre": "Sans genre"})
        assert res.status_code == 400
        assert res.json() == {"errors": [GENRE_ERROR, PLATEFORME_ERROR]}

    def test_missing_body(self, client, api):
        created = _create(client, api)
        res = client.put(f"{api}/games/{created['id']}")
        assert res.status_code == 400
        assert res.json() == {"errors": [BODY_ERROR]}

    def test_favorite_preserved_then_overwritten(self, client, api):
        created = _create(client, api)
        client.post(f"{api}/games/{created['id']}/favorite")
        payload = {"titre": "Hades", "genre": ["Action"], "plateforme": ["PC"]}

        kept = client.put(f"{api}/games/{created['id']}", json=payload).json()
        assert kept["favorite"] is True

        cleared = client.put(f"{api}/games/{created['id']}", json={**payload, "favorite": False}).json()
        assert cleared["favorite"] is False


class TestDeleteGame:
    def test_delete(self, client, api):
        created = _create(client, api)
        res = client.delete(f"{api}/games/{created['id']}")
        assert res.status_code == 204
        assert res.content == b""
        assert client.get(f"{api}/games/{created['id']}").status_code == 404

    def test_delete_unknown_keeps_collection(self, client, api):
        _create(client, api)
        assert client.delete(f"{api}/games/987654").status_code == 404
        assert len(client.get(f"{api}/games").json()) == 1


class TestFavorite:
    def test_toggle_twice(self, client, api):
        created = _create(client, api)
        once = client.post(f"{api}/games/{created['id']}/favorite").json()
        twice = client.post(f"{api}/games/{created['id']}/favorite").json()
        assert once["favorite"] is True
        assert twice["favorite"] is False
        stamps = [_ts(g["date_modification"]) for g in (created, once, twice)]
        assert stamps[0] < stamps[1] < stamps[2]


class TestStoreFailure:
    def test_generic_500(self, app, client, api):
        class BrokenService:
            def list(self, **kwargs):
                raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        app.dependency_overrides[get_game_service] = lambda: BrokenService()
        try:
            res = client.get(f"{api}/games")
        finally:
            app.dependency_overrides.clear()
        assert res.status_code == 500
        assert res.json() == {"error": "Erreur serveur"}
        assert "disk" not in res.text


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
