"""HTTP surface over the seeded in-memory SQLite database."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from person_service.api import create_app

NEW_PERSON = {
    "name": "Ada Lovelace",
    "coordinates": {"x": 5, "y": 10},
    "height": 165,
    "weight": 60.0,
    "hairColor": "BROWN",
    "eyeColor": "GREEN",
    "nationality": "FRANCE",
    "location": {"x": 1, "y": 2.0, "z": 3.0, "name": "London"},
}


def ids(response) -> list[int]:
    return [p["id"] for p in response.json()]


class TestList:
    def test_default_page(self, client) -> None:
        response = client.get("/persons")
        assert response.status_code == 200
        assert ids(response) == list(range(1, 11))
        assert response.headers["X-Total-Count"] == "15"
        assert response.headers["X-Total-Pages"] == "2"
        assert response.headers["X-Current-Page"] == "0"
        assert response.headers["X-Page-Size"] == "10"
        assert response.headers["X-Has-Next"] == "true"
        assert response.headers["X-Has-Previous"] == "false"

    def test_camel_case_body(self, client) -> None:
        person = client.get("/persons", params={"id": "4"}).json()[0]
        assert person["hairColor"] == "BLUE"
        assert person["eyeColor"] == "ORANGE"
        assert person["height"] is None
        assert person["creationDate"].startswith("2024-02-10T16:20")
        assert person["location"]["name"] == "Bangkok Tower"

    def test_filters_and_sorting(self, client) -> None:
        response = client.get(
            "/persons",
            params={"weight[gte]": "70", "sortBy": "weight", "sortDirection": "desc"},
        )
        assert ids(response) == [6, 13, 12, 1, 10, 3]
        assert response.headers["X-Total-Count"] == "6"

    def test_second_page(self, client) -> None:
        response = client.get("/persons", params={"page": "1", "size": "4"})
        assert ids(response) == [5, 6, 7, 8]
        assert response.headers["X-Has-Previous"] == "true"

    def test_enum_ordinal_filter(self, client) -> None:
        response = client.get("/persons", params={"nationality[lt]": "INDIA"})
        assert ids(response) == [1, 2, 6, 7, 11, 12]

    def test_like_filters(self, client) -> None:
        assert ids(client.get("/persons", params={"location.name[like]": "office"})) == [
            1,
            9,
            14,
        ]
        assert ids(client.get("/persons", params={"weight[like]": ".5"})) == [1, 10]

    def test_invalid_filters_are_ignored(self, client) -> None:
        response = client.get(
            "/persons",
            params={"weight[gt]": "heavy", "bogus": "1", "size": "20"},
        )
        assert response.status_code == 200
        assert len(response.json()) == 15

    def test_oversized_integer_is_ignored(self, client) -> None:
        response = client.get(
            "/persons", params={"height[gt]": "99999999999999999999", "size": "20"}
        )
        assert response.status_code == 200
        assert len(response.json()) == 15

    def test_like_wildcards_are_literal(self, client) -> None:
        assert client.get("/persons", params={"name[like]": "_"}).json() == []
        assert client.get("/persons", params={"name[like]": "%"}).json() == []

    def test_repeated_key_uses_first_value(self, client) -> None:
        response = client.get("/persons?nationality=SPAIN&nationality=INDIA")
        assert ids(response) == [2, 7, 12]

    def test_empty_result(self, client) -> None:
        response = client.get("/persons", params={"name": "Nobody"})
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "0"
        assert response.headers["X-Has-Next"] == "false"


class TestStrictFilters:
    @pytest.fixture
    def strict_client(self, settings):
        app = create_app(settings.model_copy(update={"strict_filters": True}))
        with TestClient(app) as test_client:
            yield test_client

    def test_invalid_filter_is_rejected(self, strict_client) -> None:
        response = strict_client.get("/persons", params={"weight[gt]": "heavy"})
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "INVALID_FILTER"
        assert "weight[gt]" in body["errors"]
        assert body["path"] == "/persons"

    def test_oversized_integer_is_reported(self, strict_client) -> None:
        response = strict_client.get("/persons", params={"id": "99999999999999999999"})
        assert response.status_code == 422
        assert "NUMBER_FORMAT" in response.json()["errors"]["id"][0]

    def test_valid_filter_passes(self, strict_client) -> None:
        response = strict_client.get("/persons", params={"hairColor": "green"})
        assert ids(response) == [3, 7, 11, 15]


class TestSingleResource:
    def test_get(self, client) -> None:
        response = client.get("/persons/3")
        assert response.status_code == 200
        assert response.json()["name"] == "Raj Patel"

    def test_get_missing(self, client) -> None:
        response = client.get("/persons/99")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "PERSON_NOT_FOUND"
        assert body["message"] == "Person with ID 99 not found"
        assert body["path"] == "/persons/99"
        assert "timestamp" in body

    @pytest.mark.parametrize("person_id", ["0", "-1"])
    def test_non_positive_id(self, client, person_id) -> None:
        response = client.get(f"/persons/{person_id}")
        assert response.status_code == 400
        assert response.json()["errors"] == {"id": ["ID must be a positive number"]}

    def test_create(self, client) -> None:
        response = client.post("/persons", json=NEW_PERSON)
        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 16
        assert body["hairColor"] == "BROWN"
        assert body["creationDate"]
        assert client.get("/persons/count").json() == 16

    def test_create_collects_field_errors(self, client) -> None:
        payload = {**NEW_PERSON, "name": "", "weight": 0}
        del payload["location"]
        response = client.post("/persons", json=payload)
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_FAILED"
        assert set(body["errors"]) == {"name", "weight", "location"}

    def test_create_rejects_unknown_enum(self, client) -> None:
        response = client.post("/persons", json={**NEW_PERSON, "hairColor": "PURPLE"})
        assert response.status_code == 422
        assert "hairColor" in response.json()["errors"]

    def test_update(self, client) -> None:
        original = client.get("/persons/2").json()
        response = client.put("/persons/2", json={**NEW_PERSON, "name": "Maria Lopez"})
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Maria Lopez"
        assert body["creationDate"] == original["creationDate"]
        assert client.get("/persons/2").json()["name"] == "Maria Lopez"

    def test_update_missing(self, client) -> None:
        assert client.put("/persons/77", json=NEW_PERSON).status_code == 404

    def test_delete(self, client) -> None:
        assert client.delete("/persons/5").status_code == 204
        assert client.get("/persons/5").status_code == 404
        assert client.delete("/persons/5").status_code == 404

    def test_exists_and_count(self, client) -> None:
        assert client.get("/persons/exists/1").json() is True
        assert client.get("/persons/exists/100").json() is False
        assert client.get("/persons/exists/0").json() is False
        assert client.get("/persons/count").json() == 15


class TestSpecialOperations:
    def test_delete_by_hair_color(self, client) -> None:
        assert client.delete("/persons/hair-color/brown").status_code == 204
        assert client.get("/persons/1").status_code == 404
        assert client.get("/persons/6").status_code == 200

    def test_delete_by_hair_color_invalid(self, client) -> None:
        response = client.delete("/persons/hair-color/purple")
        assert response.status_code == 400
        assert "hairColor" in response.json()["errors"]

    def test_max_name(self, client) -> None:
        response = client.get("/persons/max-name")
        assert response.json()["name"] == "Siriporn Chaiyawan"

    def test_nationality_less_than(self, client) -> None:
        response = client.get("/persons/nationality-less-than/india")
        assert ids(response) == [1, 2, 6, 7, 11, 12]
        assert client.get("/persons/nationality-less-than/FRANCE").json() == []

    def test_hair_color_statistics(self, client) -> None:
        assert client.get("/persons/statistics/hair-color").json() == {
            "GREEN": 4,
            "BLUE": 3,
            "ORANGE": 4,
            "BROWN": 4,
        }

    def test_nationality_statistics(self, client) -> None:
        assert client.get("/persons/statistics/nationality").json() == {
            "FRANCE": 3,
            "SPAIN": 3,
            "INDIA": 3,
            "THAILAND": 3,
            "SOUTH_KOREA": 3,
        }

    def test_hair_color_percentage(self, client) -> None:
        response = client.get("/persons/statistics/hair-color-percentage/BLUE")
        assert response.json() == pytest.approx(20.0)

    def test_nationality_eye_color(self, client) -> None:
        response = client.get(
            "/persons/statistics/nationality-eye-color",
            params={"nationality": "india", "eyeColor": "brown"},
        )
        assert response.json() == 2

    def test_nationality_eye_color_missing_param(self, client) -> None:
        response = client.get(
            "/persons/statistics/nationality-eye-color", params={"nationality": "INDIA"}
        )
        assert response.status_code == 422
