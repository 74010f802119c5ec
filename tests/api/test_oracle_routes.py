"""Tests for the oracle REST API — CRUD, filters, error envelopes, camelCase wire."""

from tests.fakes import JOHN_DOE


async def _create_contribution(oracle, period, amount="100.00", rssb="1023829A"):
    response = await oracle.post(
        "/api/v1/contributions",
        json={
            "period": period,
            "rssbNumber": rssb,
            "matricule": "EMP001",
            "amount": amount,
        },
    )
    assert response.status_code == 201
    return response.json()


class TestEmployees:

    async def test_create_returns_201_with_camel_case_keys(self, oracle):
        response = await oracle.post("/api/v1/employees", json=JOHN_DOE)
        assert response.status_code == 201
        body = response.json()
        assert body["rssbNumber"] == "1023829A"
        assert body["dob"] == "1990-01-15"
        assert body["id"]
        assert "createdAt" in body
        assert "rssb_number" not in body

    async def test_get_by_rssb_number(self, oracle):
        await oracle.post("/api/v1/employees", json=JOHN_DOE)
        response = await oracle.get("/api/v1/employees/1023829A")
        assert response.status_code == 200
        assert response.json()["firstname"] == "John"

    async def test_unknown_rssb_number_is_404(self, oracle):
        response = await oracle.get("/api/v1/employees/NOPE1")
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "RESOURCE_NOT_FOUND"
        assert error["context"]["rssb_number"] == "NOPE1"

    async def test_duplicate_rssb_number_is_409(self, oracle):
        await oracle.post("/api/v1/employees", json=JOHN_DOE)
        response = await oracle.post("/api/v1/employees", json=JOHN_DOE)
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT_ON_INSERT"

    async def test_missing_field_is_400_with_details(self, oracle):
        payload = {k: v for k, v in JOHN_DOE.items() if k != "lastname"}
        response = await oracle.post("/api/v1/employees", json=payload)
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert any("lastname" in d["field"] for d in error["details"])

    async def test_future_dob_is_400(self, oracle):
        response = await oracle.post(
            "/api/v1/employees", json={**JOHN_DOE, "dob": "2999-01-01"},
        )
        assert response.status_code == 400

    async def test_path_key_longer_than_column_is_400(self, oracle):
        response = await oracle.get("/api/v1/employees/" + "A" * 51)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_hyphenated_rssb_number_is_accepted(self, oracle):
        created = await oracle.post(
            "/api/v1/employees", json={**JOHN_DOE, "rssbNumber": "RW-1023829A"},
        )
        assert created.status_code == 201

        response = await oracle.get("/api/v1/employees/RW-1023829A")
        assert response.status_code == 200
        assert response.json()["rssbNumber"] == "RW-1023829A"

    async def test_list_is_empty_initially(self, oracle):
        response = await oracle.get("/api/v1/employees")
        assert response.status_code == 200
        assert response.json() == []


class TestEmployers:

    async def test_create_and_get_by_matricule(self, oracle):
        created = await oracle.post(
            "/api/v1/employers", json={"name": "Acme Ltd", "matricule": "EMP001"},
        )
        assert created.status_code == 201

        response = await oracle.get("/api/v1/employers/EMP001")
        assert response.status_code == 200
        assert response.json()["name"] == "Acme Ltd"

    async def test_duplicate_matricule_is_409(self, oracle):
        payload = {"name": "Acme Ltd", "matricule": "EMP001"}
        await oracle.post("/api/v1/employers", json=payload)
        response = await oracle.post("/api/v1/employers", json=payload)
        assert response.status_code == 409

    async def test_unknown_matricule_is_404(self, oracle):
        response = await oracle.get("/api/v1/employers/NOPE")
        assert response.status_code == 404


class TestContributions:

    async def test_amount_is_emitted_as_two_decimal_string(self, oracle):
        body = await _create_contribution(oracle, "2024-01", amount=4000000.5)
        assert body["amount"] == "4000000.50"
        assert body["rssbNumber"] == "1023829A"

    async def test_contribution_does_not_require_known_employee(self, oracle):
        body = await _create_contribution(oracle, "2024-01", rssb="GHOST1")
        assert body["rssbNumber"] == "GHOST1"

    async def test_filter_by_rssb_number_newest_period_first(self, oracle):
        await _create_contribution(oracle, "2024-01")
        await _create_contribution(oracle, "2024-03")
        await _create_contribution(oracle, "2024-02", rssb="OTHER1")

        response = await oracle.get(
            "/api/v1/contributions", params={"rssbNumber": "1023829A"},
        )
        assert response.status_code == 200
        assert [c["period"] for c in response.json()] == ["2024-03", "2024-01"]

    async def test_filter_by_period(self, oracle):
        await _create_contribution(oracle, "2024-01")
        await _create_contribution(oracle, "2024-01", rssb="OTHER1")
        await _create_contribution(oracle, "2024-02")

        response = await oracle.get(
            "/api/v1/contributions", params={"period": "2024-01"},
        )
        assert {c["rssbNumber"] for c in response.json()} == {"1023829A", "OTHER1"}

    async def test_rssb_number_filter_wins_over_period(self, oracle):
        await _create_contribution(oracle, "2024-01")
        await _create_contribution(oracle, "2024-01", rssb="OTHER1")

        response = await oracle.get(
            "/api/v1/contributions",
            params={"rssbNumber": "OTHER1", "period": "2024-01"},
        )
        assert [c["rssbNumber"] for c in response.json()] == ["OTHER1"]

    async def test_invalid_period_filter_is_400(self, oracle):
        response = await oracle.get(
            "/api/v1/contributions", params={"period": "2024-13"},
        )
        assert response.status_code == 400

    async def test_negative_amount_is_400(self, oracle):
        response = await oracle.post(
            "/api/v1/contributions",
            json={
                "period": "2024-01",
                "rssbNumber": "1023829A",
                "matricule": "EMP001",
                "amount": "-1",
            },
        )
        assert response.status_code == 400

    async def test_same_period_may_be_recorded_twice(self, oracle):
        await _create_contribution(oracle, "2024-01")
        await _create_contribution(oracle, "2024-01", amount="5.00")

        response = await oracle.get(
            "/api/v1/contributions", params={"rssbNumber": "1023829A"},
        )
        assert sorted(c["amount"] for c in response.json()) == ["100.00", "5.00"]


class TestHealth:

    async def test_liveness(self, oracle):
        response = await oracle.get("/api/v1/health/")
        assert response.status_code == 200
        assert response.json()["service"] == "oracle"

    async def test_readiness_checks_database(self, oracle):
        response = await oracle.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["checks"] == {"database": "healthy"}
