"""Integration tests for transaction endpoints."""

from datetime import date, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from finboss.core.periods import shift_months


async def _create(client: AsyncClient, headers: dict, **fields) -> dict:
    payload = {"type": "expense", "amount": 10.0, "category": "food", **fields}
    response = await client.post("/api/v1/transactions", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestTransactionCrud:
    """Create, read, update and delete."""

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, client: AsyncClient, auth_headers: dict):
        """Test a created transaction reads back unchanged."""
        created = await _create(
            client,
            auth_headers,
            type="income",
            amount=1234.56,
            category="salary",
            description="January pay",
            date="2024-01-31",
        )

        response = await client.get(f"/api/v1/transactions/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["type"] == "income"
        assert data["amount"] == 1234.56
        assert data["category"] == "salary"
        assert data["description"] == "January pay"
        assert data["date"] == "2024-01-31"
        assert "createdAt" in data

    @pytest.mark.asyncio
    async def test_date_defaults_to_today(self, client: AsyncClient, auth_headers: dict):
        created = await _create(client, auth_headers)

        assert created["date"] == date.today().isoformat()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "expense", "amount": 0, "category": "food"},
            {"type": "expense", "amount": -5, "category": "food"},
            {"type": "transfer", "amount": 5, "category": "food"},
            {"type": "expense", "amount": 5},
            {"type": "expense", "amount": 5, "category": "food", "description": "x" * 501},
            {"type": "expense", "amount": 5, "category": "food", "date": "not-a-date"},
            {"type": "expense", "amount": 10.005, "category": "food"},
            {"type": "expense", "amount": 0.001, "category": "food"},
            {"type": "expense", "amount": 1e13, "category": "food"},
            {"type": "expense", "amount": 5, "category": "   "},
        ],
    )
    async def test_create_validation(self, client: AsyncClient, auth_headers: dict, payload):
        response = await client.post("/api/v1/transactions", headers=auth_headers, json=payload)

        assert response.status_code == 400
        assert response.json()["status"] == "error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0.01, 10.01, 9_999_999_999.99])
    async def test_amount_round_trips(self, client: AsyncClient, auth_headers: dict, amount):
        created = await _create(client, auth_headers, amount=amount)

        response = await client.get(f"/api/v1/transactions/{created['id']}", headers=auth_headers)

        assert response.json()["data"]["amount"] == amount

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "changes", [{"amount": 1.999}, {"amount": 1e13}, {"category": " "}]
    )
    async def test_update_validation(self, client: AsyncClient, auth_headers: dict, changes):
        created = await _create(client, auth_headers)

        response = await client.put(
            f"/api/v1/transactions/{created['id']}", headers=auth_headers, json=changes
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.get("/api/v1/transactions")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_update(self, client: AsyncClient, auth_headers: dict):
        created = await _create(client, auth_headers, description="coffee")

        response = await client.put(
            f"/api/v1/transactions/{created['id']}",
            headers=auth_headers,
            json={"amount": 12.5, "date": "2024-03-01"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["amount"] == 12.5
        assert data["date"] == "2024-03-01"
        assert data["category"] == "food"
        assert data["description"] == "coffee"

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, auth_headers: dict):
        created = await _create(client, auth_headers)

        response = await client.delete(
            f"/api/v1/transactions/{created['id']}", headers=auth_headers
        )
        assert response.status_code == 200

        again = await client.get(f"/api/v1/transactions/{created['id']}", headers=auth_headers)
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_other_users_transaction_is_not_found(
        self, client: AsyncClient, auth_headers: dict, other_headers: dict
    ):
        created = await _create(client, auth_headers)
        url = f"/api/v1/transactions/{created['id']}"

        assert (await client.get(url, headers=other_headers)).status_code == 404
        assert (await client.put(url, headers=other_headers, json={"amount": 1})).status_code == 404
        assert (await client.delete(url, headers=other_headers)).status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_id(self, client: AsyncClient, auth_headers: dict):
        response = await client.get(f"/api/v1/transactions/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Transaction not found"}


class TestTransactionList:
    """Filtering and pagination."""

    @pytest.mark.asyncio
    async def test_filters_and_order(self, client: AsyncClient, auth_headers: dict, other_headers):
        await _create(client, auth_headers, category="food", date="2024-01-05")
        await _create(client, auth_headers, category="rent", date="2024-01-10")
        await _create(client, auth_headers, type="income", category="salary", date="2024-01-20")
        await _create(client, other_headers, category="food", date="2024-01-07")

        response = await client.get("/api/v1/transactions", headers=auth_headers)
        data = response.json()["data"]
        assert [t["date"] for t in data["transactions"]] == [
            "2024-01-20",
            "2024-01-10",
            "2024-01-05",
        ]
        assert data["pagination"] == {"total": 3, "page": 1, "limit": 20, "pages": 1}

        expenses = await client.get(
            "/api/v1/transactions", headers=auth_headers, params={"type": "expense"}
        )
        assert expenses.json()["data"]["pagination"]["total"] == 2

        food = await client.get(
            "/api/v1/transactions", headers=auth_headers, params={"category": "food"}
        )
        assert len(food.json()["data"]["transactions"]) == 1

        ranged = await client.get(
            "/api/v1/transactions",
            headers=auth_headers,
            params={"startDate": "2024-01-06", "endDate": "2024-01-15T23:59:59Z"},
        )
        assert [t["category"] for t in ranged.json()["data"]["transactions"]] == ["rent"]

    @pytest.mark.asyncio
    async def test_pagination(self, client: AsyncClient, auth_headers: dict):
        for day in range(1, 6):
            await _create(client, auth_headers, date=f"2024-02-0{day}")

        response = await client.get(
            "/api/v1/transactions", headers=auth_headers, params={"page": 2, "limit": 2}
        )

        data = response.json()["data"]
        assert [t["date"] for t in data["transactions"]] == ["2024-02-03", "2024-02-02"]
        assert data["pagination"] == {"total": 5, "page": 2, "limit": 2, "pages": 3}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 101}, {"type": "other"}])
    async def test_invalid_query(self, client: AsyncClient, auth_headers: dict, params):
        response = await client.get("/api/v1/transactions", headers=auth_headers, params=params)

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"startDate": "yesterday"},
            {"endDate": "2024-02-30"},
            {"startDate": "2024-03-01", "endDate": "2024-02-01"},
        ],
    )
    async def test_malformed_dates(self, client: AsyncClient, auth_headers: dict, params):
        response = await client.get("/api/v1/transactions", headers=auth_headers, params=params)

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid date range")


class TestAggregates:
    """Summary and per-category totals."""

    @pytest.mark.asyncio
    async def test_summary(self, client: AsyncClient, auth_headers: dict, other_headers: dict):
        await _create(client, auth_headers, type="income", amount=2000, category="salary")
        await _create(client, auth_headers, amount=150.25, category="food")
        await _create(client, auth_headers, amount=49.75, category="rent")
        await _create(client, other_headers, type="income", amount=999, category="salary")

        response = await client.get("/api/v1/transactions/summary", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {"income": 2000.0, "expense": 200.0, "balance": 1800.0}

    @pytest.mark.asyncio
    async def test_summary_without_transactions(self, client: AsyncClient, auth_headers: dict):
        response = await client.get("/api/v1/transactions/summary", headers=auth_headers)

        assert response.json()["data"] == {"income": 0.0, "expense": 0.0, "balance": 0.0}

    @pytest.mark.asyncio
    async def test_summary_in_range(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, amount=10, date="2024-01-15")
        await _create(client, auth_headers, amount=20, date="2024-02-15")

        response = await client.get(
            "/api/v1/transactions/summary",
            headers=auth_headers,
            params={"startDate": "2024-02-01", "endDate": "2024-02-29"},
        )

        assert response.json()["data"]["expense"] == 20.0

    @pytest.mark.asyncio
    async def test_by_category(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, amount=30, category="food")
        await _create(client, auth_headers, amount=20, category="food")
        await _create(client, auth_headers, amount=100, category="rent")
        await _create(client, auth_headers, type="income", amount=10, category="gift")

        response = await client.get(
            "/api/v1/transactions/analytics/category", headers=auth_headers
        )

        assert response.json()["data"] == [
            {"category": "rent", "total": 100.0, "count": 1, "type": "expense"},
            {"category": "food", "total": 50.0, "count": 2, "type": "expense"},
            {"category": "gift", "total": 10.0, "count": 1, "type": "income"},
        ]


class TestTrends:
    """Bucketed income/expense series."""

    @pytest.mark.asyncio
    async def test_requires_range(self, client: AsyncClient, auth_headers: dict):
        response = await client.get("/api/v1/transactions/trends", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "startDate and endDate are required"

    @pytest.mark.asyncio
    async def test_daily(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, type="income", amount=500, category="salary", date="2024-01-01")
        await _create(client, auth_headers, amount=40, date="2024-01-01")
        await _create(client, auth_headers, amount=60, date="2024-01-03")
        await _create(client, auth_headers, amount=999, date="2024-02-01")

        response = await client.get(
            "/api/v1/transactions/trends",
            headers=auth_headers,
            params={"startDate": "2024-01-01", "endDate": "2024-01-31"},
        )

        assert response.status_code == 200
        assert response.json()["data"] == [
            {"date": "2024-01-01", "income": 500.0, "expense": 40.0, "balance": 460.0},
            {"date": "2024-01-03", "income": 0.0, "expense": 60.0, "balance": -60.0},
        ]

    @pytest.mark.asyncio
    async def test_monthly_expense_only(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, type="income", amount=500, category="salary", date="2024-01-01")
        await _create(client, auth_headers, amount=40, date="2024-01-09")
        await _create(client, auth_headers, amount=60, date="2024-03-03")

        response = await client.get(
            "/api/v1/transactions/trends",
            headers=auth_headers,
            params={
                "startDate": "2024-01-01",
                "endDate": "2024-03-31",
                "groupBy": "month",
                "type": "expense",
            },
        )

        assert response.json()["data"] == [
            {"date": "2024-01", "income": 0.0, "expense": 40.0, "balance": -40.0},
            {"date": "2024-03", "income": 0.0, "expense": 60.0, "balance": -60.0},
        ]

    @pytest.mark.asyncio
    async def test_weekly(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, amount=10, date="2024-01-16")
        await _create(client, auth_headers, amount=15, date="2024-01-21")
        await _create(client, auth_headers, amount=20, date="2024-01-22")

        response = await client.get(
            "/api/v1/transactions/trends",
            headers=auth_headers,
            params={"startDate": "2024-01-01", "endDate": "2024-01-31", "groupBy": "week"},
        )

        assert [(p["date"], p["expense"]) for p in response.json()["data"]] == [
            ("2024-01-15", 25.0),
            ("2024-01-22", 20.0),
        ]

    @pytest.mark.asyncio
    async def test_invalid_group_by(self, client: AsyncClient, auth_headers: dict):
        response = await client.get(
            "/api/v1/transactions/trends",
            headers=auth_headers,
            params={"startDate": "2024-01-01", "endDate": "2024-01-31", "groupBy": "year"},
        )

        assert response.status_code == 400


class TestForecast:
    """Projection from the last three full months."""

    @staticmethod
    def _month(offset: int) -> str:
        first_of_month = date.today().replace(day=1)
        return (shift_months(first_of_month, offset) + timedelta(days=14)).isoformat()

    @pytest.mark.asyncio
    async def test_no_history(self, client: AsyncClient, auth_headers: dict):
        response = await client.get("/api/v1/transactions/forecast", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {
            "historical_average": 0.0,
            "projected_spending": 0.0,
            "confidence": 0,
            "months": 3,
        }

    @pytest.mark.asyncio
    async def test_steady_history(self, client: AsyncClient, auth_headers: dict):
        for offset in (-1, -2, -3):
            await _create(client, auth_headers, amount=300, date=self._month(offset))
        # Outside the window or not an expense.
        await _create(client, auth_headers, amount=5000, date=self._month(-4))
        await _create(client, auth_headers, amount=5000, date=date.today().replace(day=1).isoformat())
        await _create(
            client, auth_headers, type="income", amount=5000, category="salary", date=self._month(-1)
        )

        response = await client.get(
            "/api/v1/transactions/forecast", headers=auth_headers, params={"months": 2}
        )

        assert response.json()["data"] == {
            "historical_average": 300.0,
            "projected_spending": 600.0,
            "confidence": 100,
            "months": 2,
        }

    @pytest.mark.asyncio
    async def test_category_filter(self, client: AsyncClient, auth_headers: dict):
        await _create(client, auth_headers, amount=100, category="food", date=self._month(-1))
        await _create(client, auth_headers, amount=900, category="rent", date=self._month(-1))

        response = await client.get(
            "/api/v1/transactions/forecast",
            headers=auth_headers,
            params={"category": "food", "months": 1},
        )

        data = response.json()["data"]
        assert data["historical_average"] == 100.0
        assert data["projected_spending"] == 100.0
        assert data["confidence"] == 33

    @pytest.mark.asyncio
    @pytest.mark.parametrize("months", [0, 13])
    async def test_months_bounds(self, client: AsyncClient, auth_headers: dict, months):
        response = await client.get(
            "/api/v1/transactions/forecast", headers=auth_headers, params={"months": months}
        )

        assert response.status_code == 400
