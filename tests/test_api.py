import pytest

from lotto_research.games import MEGA_645
from lotto_research.services.constraints import is_valid_combination


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_games(client):
    ids = {g["id"] for g in client.get("/api/games").get_json()}
    assert ids == {"mega645", "power655", "loto535", "max3d", "keno"}


@pytest.mark.parametrize("mode", ["mechanical", "optimized", "balanced", "enhanced"])
def test_generate_matrix_game(client, mode):
    resp = client.get(f"/api/generate?game=mega645&mode={mode}")
    assert resp.status_code == 200
    data = resp.get_json()
    numbers = data["numbers"]
    assert data["mode"] == mode
    assert data["type"] == "matrix"
    assert len(set(numbers)) == 6
    assert all(1 <= n <= 45 for n in numbers)


def test_generate_balanced_returns_valid_set(client):
    data = client.get("/api/generate?game=mega645&mode=balanced").get_json()
    if not data["fallback"]:
        assert is_valid_combination(data["numbers"], MEGA_645)
    assert data["reasons"]


def test_generate_smart_alias(client):
    assert client.get("/api/generate?game=power655&smart=true").get_json()["mode"] == "optimized"
    assert client.get("/api/generate?game=power655").get_json()["mode"] == "mechanical"


def test_generate_compound_game(client):
    data = client.get("/api/generate?game=loto535&mode=balanced").get_json()
    main, special = data["numbers"]
    assert len(set(main)) == 5
    assert len(special) == 1 and 1 <= special[0] <= 12


@pytest.mark.parametrize("mode", ["mechanical", "enhanced"])
def test_generate_digit_game(client, mode):
    data = client.get(f"/api/generate?game=max3d&mode={mode}").get_json()
    assert data["type"] == "digit"
    assert len(data["numbers"]) == 2
    assert all(len(part) == 3 and all(0 <= d <= 9 for d in part) for part in data["numbers"])


@pytest.mark.parametrize("url", [
    "/api/generate?game=unknown",
    "/api/generate",
    "/api/generate?game=mega645&mode=psychic",
    "/api/generate?game=max3d&mode=balanced",
    "/api/statistics?game=unknown",
    "/api/statistics?game=mega645&limit=abc",
])
def test_bad_requests(client, url):
    resp = client.get(url)
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_statistics(client):
    data = client.get("/api/statistics?game=mega645").get_json()
    assert data["game"] == "mega645"
    assert data["total_draws"] == 10
    assert len(data["frequency"]) == 45
    assert len(data["predictions"]) == 15
    assert {"odd_even", "high_low", "sum", "decades", "consecutive", "pairs", "gap"} <= set(data)


def test_statistics_with_limit(client):
    assert client.get("/api/statistics?game=power655&limit=4").get_json()["total_draws"] == 4


def test_history(client):
    rows = client.get("/api/history?game=power655").get_json()
    assert len(rows) == 10
    assert all(r["game"] == "power655" for r in rows)
    assert len(client.get("/api/history").get_json()) == 20


def test_check_history(client):
    resp = client.post("/api/check-history", json={"game": "mega645", "numbers": [1, 18, 21, 23, 30, 36]})
    assert resp.status_code == 200
    assert resp.get_json()["match"]["best_match"]["matches"] == 6


def test_check_history_requires_game_and_numbers(client):
    assert client.post("/api/check-history", json={"game": "mega645"}).status_code == 400
    assert client.post("/api/check-history", json={"game": "mega645", "numbers": ["x"]}).status_code == 400


def test_entropy(client, app):
    resp = client.post("/api/entropy", json={"mouseX": 512, "mouseY": 7, "timestamp": 1700000000123})
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True, "bytes": 3, "user_samples": 1}
    assert app.extensions["entropy_pool"].user_samples == 1


def test_entropy_rejects_non_numeric(client):
    assert client.post("/api/entropy", json={"mouseX": "left"}).status_code == 400


def test_entropy_rejects_infinite_number(client, app):
    resp = client.post("/api/entropy", data='{"mouseX": 1e400}', content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "entropy fields must be numeric"}
    assert app.extensions["entropy_pool"].user_samples == 0


def test_check_history_rejects_non_list_numbers(client):
    resp = client.post("/api/check-history", json={"game": "mega645", "numbers": "123"})
    assert resp.status_code == 400
    assert "list" in resp.get_json()["error"]


def test_check_history_rejects_infinite_number(client):
    resp = client.post("/api/check-history", data='{"game": "mega645", "numbers": [1e400]}',
                       content_type="application/json")
    assert resp.status_code == 400


def test_statistics_rejects_negative_limit(client):
    resp = client.get("/api/statistics?game=mega645&limit=-5")
    assert resp.status_code == 400
    assert client.get("/api/statistics?game=mega645&limit=0").get_json()["total_draws"] == 10


def test_statistics_error_is_not_cached(app):
    from lotto_research.routes import _bad_request, _cache_ok

    with app.test_request_context():
        assert not _cache_ok(_bad_request("Invalid game"))
