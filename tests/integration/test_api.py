"""Integration tests for API endpoints"""

import uuid
import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient


CUSTOMER_PAYLOAD = {
    "first_name": "Cami",
    "last_name": "Cavalcante",
    "cpf": "529.982.247-25",
    "income": "1000.0",
    "email": "camila@email.com",
    "password": "1234",
    "zip_code": "000000",
    "street": "Rua da Cami, 123",
}


def credit_payload(customer_id: int, **overrides) -> dict:
    payload = {
        "credit_value": "100.0",
        "day_first_installment": (date.today() + timedelta(days=60)).isoformat(),
        "number_of_installments": 15,
        "customer_id": customer_id,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def customer_id(client: TestClient) -> int:
    response = client.post("/v1/customers", json=CUSTOMER_PAYLOAD)
    assert response.status_code == 201
    return 1  # tables are recreated per test, so the first customer is id 1


def create_credit(client: TestClient, customer_id: int, **overrides) -> str:
    response = client.post("/v1/credits", json=credit_payload(customer_id, **overrides))
    assert response.status_code == 201
    # "Credit {code} - Customer {email} saved!"
    return response.json().split()[1]


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_create_customer(client: TestClient):
    """Test POST /v1/customers"""
    response = client.post("/v1/customers", json=CUSTOMER_PAYLOAD)

    assert response.status_code == 201
    assert response.json() == "Customer camila@email.com saved!"


def test_create_customer_invalid_fields(client: TestClient):
    """Test field errors are reported together as exception details"""
    payload = {**CUSTOMER_PAYLOAD, "cpf": "123", "email": "bad"}
    del payload["first_name"]

    response = client.post("/v1/customers", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["status"] == 400
    assert data["exception"] == "DomainValidationError"
    assert data["details"] == {
        "first_name": "First name is required",
        "cpf": "CPF is invalid",
        "email": "Email is invalid",
    }


def test_create_customer_duplicate_cpf(client: TestClient, customer_id: int):
    response = client.post("/v1/customers", json={**CUSTOMER_PAYLOAD, "email": "other@email.com"})
    assert response.status_code == 409


def test_create_customer_duplicate_cpf_other_spelling(client: TestClient, customer_id: int):
    """Test digits-only CPF collides with the formatted one already registered"""
    payload = {**CUSTOMER_PAYLOAD, "cpf": "52998224725", "email": "other@email.com"}

    response = client.post("/v1/customers", json=payload)

    assert response.status_code == 409


def test_get_customer(client: TestClient, customer_id: int):
    """Test GET /v1/customers/{id} never exposes the password"""
    response = client.get(f"/v1/customers/{customer_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == customer_id
    assert data["cpf"] == "529.982.247-25"
    assert data["zip_code"] == "000000"
    assert "password" not in data


def test_get_customer_not_found(client: TestClient):
    response = client.get("/v1/customers/999")

    assert response.status_code == 404
    assert response.json()["details"] == {"message": "Id 999 not found"}


def test_update_customer(client: TestClient, customer_id: int):
    """Test PATCH /v1/customers?customer_id="""
    response = client.patch(
        f"/v1/customers?customer_id={customer_id}",
        json={
            "first_name": "Camila",
            "last_name": "Cavalcante",
            "income": "5000.0",
            "zip_code": "45656",
            "street": "Rua Atualizada",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["first_name"] == "Camila"
    assert data["street"] == "Rua Atualizada"
    assert client.get(f"/v1/customers/{customer_id}").json()["zip_code"] == "45656"


def test_delete_customer(client: TestClient, customer_id: int):
    create_credit(client, customer_id)

    response = client.delete(f"/v1/customers/{customer_id}")

    assert response.status_code == 204
    assert client.get(f"/v1/customers/{customer_id}").status_code == 404
    assert client.get(f"/v1/credits?customer_id={customer_id}").json() == []


def test_delete_customer_not_found(client: TestClient):
    assert client.delete("/v1/customers/999").status_code == 404


def test_create_credit(client: TestClient, customer_id: int):
    """Test POST /v1/credits"""
    response = client.post("/v1/credits", json=credit_payload(customer_id))

    assert response.status_code == 201
    message = response.json()
    assert message.startswith("Credit ")
    assert message.endswith(" - Customer camila@email.com saved!")
    uuid.UUID(message.split()[1])


def test_create_credit_unknown_customer(client: TestClient):
    """Test credit for a missing customer is rejected and nothing is stored"""
    response = client.post("/v1/credits", json=credit_payload(1))

    assert response.status_code == 404
    assert response.json()["details"] == {"message": "Id 1 not found"}
    assert client.get("/v1/credits?customer_id=1").json() == []


def test_create_credit_past_installment(client: TestClient, customer_id: int):
    payload = credit_payload(customer_id, day_first_installment=date.today().isoformat())

    response = client.post("/v1/credits", json=payload)

    assert response.status_code == 400
    assert response.json()["details"] == {
        "day_first_installment": "The first of installment cannot be in the past"
    }


def test_list_credits(client: TestClient, customer_id: int):
    """Test GET /v1/credits?customer_id= returns credits in creation order"""
    first = create_credit(client, customer_id, number_of_installments=10)
    second = create_credit(client, customer_id, number_of_installments=20)

    response = client.get(f"/v1/credits?customer_id={customer_id}")

    assert response.status_code == 200
    data = response.json()
    assert [c["credit_code"] for c in data] == [first, second]
    assert [c["number_of_installments"] for c in data] == [10, 20]


def test_list_credits_unknown_customer(client: TestClient):
    response = client.get("/v1/credits?customer_id=999")

    assert response.status_code == 200
    assert response.json() == []


def test_get_credit_by_code(client: TestClient, customer_id: int):
    """Test GET /v1/credits/{credit_code} for the owner"""
    credit_code = create_credit(client, customer_id)

    response = client.get(f"/v1/credits/{credit_code}?customer_id={customer_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["credit_code"] == credit_code
    assert data["number_of_installments"] == 15
    assert data["status"] == "IN_PROGRESS"
    assert data["email_customer"] == "camila@email.com"


def test_get_credit_by_unknown_code(client: TestClient, customer_id: int):
    credit_code = uuid.uuid4()

    response = client.get(f"/v1/credits/{credit_code}?customer_id={customer_id}")

    assert response.status_code == 404
    assert response.json()["details"] == {"message": f"Creditcode {credit_code} not found"}


def test_get_credit_of_another_customer(client: TestClient, customer_id: int):
    """Test cross-customer access is refused with a generic message"""
    credit_code = create_credit(client, customer_id)
    client.post("/v1/customers", json={**CUSTOMER_PAYLOAD, "cpf": "111.444.777-35", "email": "other@email.com"})

    response = client.get(f"/v1/credits/{credit_code}?customer_id=2")

    assert response.status_code == 400
    data = response.json()
    assert data["exception"] == "InvariantViolationError"
    assert data["details"] == {"message": "Contact admin"}


def test_metrics_endpoint(client: TestClient, customer_id: int):
    """Test Prometheus metrics endpoint"""
    create_credit(client, customer_id)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "credit_created_total" in response.text


@pytest.mark.parametrize("out_of_range_id", [0, 10**20])
def test_customer_id_out_of_range_is_rejected(client: TestClient, out_of_range_id: int):
    """Test ids outside 1..BIGINT max never reach the database"""
    assert client.get("/v1/credits", params={"customer_id": out_of_range_id}).status_code == 422
    assert client.get(f"/v1/customers/{out_of_range_id}").status_code == 422
    assert client.delete(f"/v1/customers/{out_of_range_id}").status_code == 422
    assert client.get(f"/v1/credits/{uuid.uuid4()}", params={"customer_id": out_of_range_id}).status_code == 422
    assert client.post("/v1/credits", json=credit_payload(out_of_range_id)).status_code == 422
