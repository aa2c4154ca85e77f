from conftest import StubRepository, add_prayer, add_saint

from viafidei_app.content import build_services
from viafidei_app.database import get_db_session
from viafidei_app.extensions import init_content_services
from viafidei_app.models import User


def _break_repository(app):
    services = build_services(env=app.config, repository=StubRepository(error=RuntimeError("db down")))
    init_content_services(app, services)


def test_health_ok(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "ok"
    assert data["db"] == "ok"
    assert data["sourceCache"] == {"entries": {}, "loads": 0}


def test_languages(client):
    resp = client.get("/api/languages?language=es")
    data = resp.get_json()
    assert "uk" in data["languages"]
    assert data["default"] == "en"
    assert data["current"] == "es"


def test_list_prayers_from_builtin_library(client):
    resp = client.get("/api/prayers")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["language"] == "en"
    assert data["nextCursor"] is None
    first = data["items"][0]
    assert first["title"] == "Our Father"
    assert first["content"].startswith("Our Father")
    assert first["category"] == "CHRIST_CENTERED"
    assert set(first) >= {"id", "slug", "tags", "source", "sourceUrl", "sourceAttribution", "updatedAt"}


def test_list_prayers_from_database_with_cursor(client):
    add_prayer("angelus", "Angelus")
    add_prayer("memorare", "Memorare")

    first = client.get("/api/prayers?take=1").get_json()
    assert [p["slug"] for p in first["items"]] == ["angelus"]

    second = client.get(f"/api/prayers?take=1&cursor={first['nextCursor']}").get_json()
    assert [p["slug"] for p in second["items"]] == ["memorare"]
    assert second["nextCursor"] is None


def test_list_prayers_other_language_empty(client):
    resp = client.get("/api/prayers", headers={"Accept-Language": "pl-PL,pl;q=0.9"})
    data = resp.get_json()
    assert data["language"] == "pl"
    assert data["items"] == []


def test_prayer_detail_and_not_found(client):
    resp = client.get("/api/prayers/hail-mary")
    assert resp.status_code == 200
    assert resp.get_json()["prayer"]["title"] == "Hail Mary"

    resp = client.get("/api/prayers/no-such-prayer")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Prayer not found"}


def test_search_prayers_suggest(client):
    resp = client.get("/api/prayers/search/local?q=our")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["query"] == "our"
    assert data["suggestions"][0]["title"] == "Our Father"
    assert len(data["suggestions"]) <= 3
    assert data["results"] == []


def test_search_prayers_full(client):
    data = client.get("/api/prayers/search/local?q=memorare&mode=full").get_json()
    assert [r["slug"] for r in data["results"]] == ["memorare"]
    assert data["results"][0]["content"]


def test_search_prayers_blank_query(client):
    data = client.get("/api/prayers/search/local?q=%20%20").get_json()
    assert data == {"language": "en", "query": "", "suggestions": [], "results": []}


def test_search_prayers_invalid_mode(client):
    resp = client.get("/api/prayers/search/local?q=our&mode=fuzzy")
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["error"] == "Invalid mode"
    assert data["code"] == "invalid_request"


def test_saints_and_apparitions_listings(client):
    saints = client.get("/api/saints/saints").get_json()
    assert saints["items"][0]["name"] == "Saint Francis of Assisi"
    assert "biography" in saints["items"][0]
    assert "patronages" in saints["items"][0]

    apparitions = client.get("/api/saints/apparitions").get_json()
    assert apparitions["items"][0]["title"] == "Our Lady of Fátima"
    assert apparitions["items"][0]["location"] == "Fátima, Portugal"


def test_saint_and_apparition_detail(client):
    resp = client.get("/api/saints/saints/st-joseph")
    assert resp.get_json()["saint"]["name"] == "Saint Joseph"

    resp = client.get("/api/saints/apparitions/our-lady-of-lourdes")
    assert resp.get_json()["apparition"]["title"] == "Our Lady of Lourdes"

    resp = client.get("/api/saints/apparitions/st-joseph")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Apparition not found"}


def test_search_saints_full(client):
    add_saint("st-dominic", "Saint Dominic", tags=["rosary"])

    data = client.get("/api/saints/search/local?q=rosary&mode=full").get_json()

    assert data["suggestions"][0] == {
        "kind": "saint", "id": data["resultsSaints"][0]["id"],
        "title": "Saint Dominic", "slug": "st-dominic",
    }
    assert [r["slug"] for r in data["resultsSaints"]] == ["st-dominic"]
    assert [r["slug"] for r in data["resultsApparitions"]] == ["our-lady-of-fatima"]


def test_search_saints_type_filter(client):
    data = client.get("/api/saints/search/local?q=lourdes&type=saint&mode=full").get_json()
    assert data["resultsSaints"] == []
    assert data["resultsApparitions"] == []
    assert data["suggestions"] == []


def test_search_saints_invalid_type(client):
    resp = client.get("/api/saints/search/local?q=x&type=angel")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid type"


def test_search_saints_blank_query(client):
    data = client.get("/api/saints/search/local").get_json()
    assert data["suggestions"] == []
    assert data["resultsSaints"] == [] and data["resultsApparitions"] == []


def test_user_language_override_beats_query(app, client):
    with get_db_session() as db:
        user = User(email="reader@example.com", language_override="es")
        db.add(user)
        db.flush()
        user_id = user.id
    add_prayer("padre-nuestro", "Padre Nuestro", language="es")

    with client.session_transaction() as sess:
        sess["_user_id"] = user_id

    data = client.get("/api/prayers?language=fr").get_json()
    assert data["language"] == "es"
    assert [p["slug"] for p in data["items"]] == ["padre-nuestro"]


def test_failures_return_500(app, client):
    _break_repository(app)

    resp = client.get("/api/prayers")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to load prayers"}

    resp = client.get("/api/prayers/search/local?q=our")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to search prayers"}

    resp = client.get("/api/saints/search/local?q=joseph")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to search saints and apparitions"}

    resp = client.get("/api/saints/saints/st-joseph")
    assert resp.status_code == 500


def test_unknown_api_path_is_json_404(client):
    resp = client.get("/api/rosaries")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Not found"}
