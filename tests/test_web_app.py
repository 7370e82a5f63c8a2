"""Tests for the Flask front end."""

from __future__ import annotations

import importlib.util
import sys

import pytest

from conftest import PROJECT_ROOT, SAMPLE_DATA_PATH

ORYX_PATH = ["Animalia", "Chordata", "Mammalia", "Artiodactyla", "Bovidae", "Oryx"]


@pytest.fixture(scope="module")
def web_app():
    """Import web/app.py and load the sample dataset."""
    name = "taxabrowser_web_app"
    spec = importlib.util.spec_from_file_location(name, PROJECT_ROOT / "web" / "app.py")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    spec.loader.exec_module(module)
    module.load_data(SAMPLE_DATA_PATH)
    module.app.config["TESTING"] = True
    yield module
    sys.modules.pop(name, None)


@pytest.fixture
def client(web_app):
    return web_app.app.test_client()


def option_keys(level):
    return [option["English"] for option in level["options"]]


def test_health(client):
    data = client.get("/health").get_json()
    assert data["status"] == "ok"
    assert data["dataset_loaded"] is True
    assert data["records"] == 6
    assert data["last_modified"]


def test_index_page_renders(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b"searchInput" in response.data
    assert b"const DEBOUNCE_MS = 300;" in response.data


def test_initial_state(client):
    data = client.get("/api/state").get_json()

    assert option_keys(data["levels"][0]) == ["Animalia", "Plantae"]
    assert data["levels"][0]["label"] == "مملكة"
    assert all(not level["enabled"] for level in data["levels"][1:])
    assert data["species"] == []


def test_selecting_kingdom_populates_phyla(client):
    data = client.post("/api/select", json={"level": 0, "value": "Animalia"}).get_json()

    assert data["levels"][0]["selected"] == "Animalia"
    assert data["levels"][1]["enabled"]
    assert option_keys(data["levels"][1]) == ["Arthropoda", "Chordata", "Mollusca"]
    assert not data["levels"][2]["enabled"]


def test_selection_persists_in_session(client):
    for level, key in enumerate(ORYX_PATH[:5]):
        client.post("/api/select", json={"level": level, "value": key})

    data = client.post("/api/select", json={"level": 5, "value": "Gazella"}).get_json()

    assert [card["english"] for card in data["species"]] == ["Sand Gazelle", "Mountain Gazelle"]
    assert client.get("/api/state").get_json()["levels"][5]["selected"] == "Gazella"


def test_unsetting_with_empty_value(client):
    client.post("/api/select", json={"level": 0, "value": "Animalia"})
    data = client.post("/api/select", json={"level": 0, "value": ""}).get_json()

    assert data["levels"][0]["selected"] is None
    assert not data["levels"][1]["enabled"]


@pytest.mark.parametrize("payload", [
    {"level": 6, "value": "x"},
    {"level": "0"},
    {"value": 3, "level": 0},
    {"level": True, "value": "Chordata"},
    {},
    [0, "Animalia"],
])
def test_select_rejects_bad_requests(client, payload):
    response = client.post("/api/select", json=payload)
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_reset(client):
    client.post("/api/select", json={"level": 0, "value": "Animalia"})
    data = client.post("/api/reset").get_json()
    assert data["levels"][0]["selected"] is None


def test_search_returns_highlighted_hits(client):
    data = client.get("/api/search", query_string={"q": "  ORYX "}).get_json()

    assert data["query"] == "oryx"
    first = data["results"][0]
    assert first["species"]["English"] == "Arabian Oryx"
    assert first["name_en"] == 'Arabian <span class="highlight">Oryx</span>'
    assert first["path"] == ORYX_PATH
    assert first["path_text"].startswith("الحيوانات > الحبليات")
    assert first["local_names"].startswith("(الوضيحي")


def test_search_ignores_short_queries(client):
    assert client.get("/api/search", query_string={"q": "o"}).get_json() == {"query": None, "results": []}


def test_search_limits_results(client):
    assert len(client.get("/api/search", query_string={"q": "a"}).get_json()["results"]) <= 5


def test_jump_selects_path_and_locates_species(client):
    data = client.post("/api/jump", json={
        "path": ORYX_PATH[:5] + ["Gazella"],
        "species": {"Arabic": "غزال الإدمي", "English": "Mountain Gazelle"},
    }).get_json()

    assert data["target_index"] == 1
    assert [level["selected"] for level in data["levels"]] == ORYX_PATH[:5] + ["Gazella"]
    assert data["species"][1]["english"] == "Mountain Gazelle"
    assert client.get("/api/state").get_json()["levels"][5]["selected"] == "Gazella"


def test_jump_with_unknown_species_still_applies_path(client):
    data = client.post("/api/jump", json={"path": ORYX_PATH, "species": {"English": "Unicorn"}}).get_json()

    assert data["target_index"] is None
    assert [card["english"] for card in data["species"]] == ["Arabian Oryx"]


def test_jump_requires_full_path(client):
    response = client.post("/api/jump", json={"path": ORYX_PATH[:3]})
    assert response.status_code == 400


@pytest.mark.parametrize("species", ["Arabian Oryx", ["Arabian Oryx"], {"English": 3}, {"Arabic": None}])
def test_jump_rejects_malformed_species(client, species):
    response = client.post("/api/jump", json={"path": ORYX_PATH, "species": species})
    assert response.status_code == 400
    assert "error" in response.get_json()
