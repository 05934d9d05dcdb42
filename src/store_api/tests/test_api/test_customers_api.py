class TestCustomersApi:

    def test_create_and_duplicate(self, client, create_customer):
        """
        Behavior:
                - First POST stores the normalized email and returns 201.
                - Second POST with the same email in another case returns 409.

        Importance:
                - The conflict must reach the client as a 409 envelope, not a 500.
        """
        created = create_customer(email=" Ana@Example.com ")
        assert created["email"] == "ana@example.com"

        response = client.post("/clientes", json={"name": "Other", "email": "ANA@example.com"})

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "error": {
                "message": "Email already registered",
                "status": 409,
                "code": "conflict",
                "fields": ["email"],
            },
        }

    def test_invalid_email(self, client):
        response = client.post("/clientes", json={"name": "Ana", "email": "nope"})

        assert response.status_code == 400
        assert response.json()["error"]["fields"] == ["email"]

    def test_get_by_email(self, client, create_customer):
        customer = create_customer(email="find@example.com")

        response = client.get("/clientes/email/find@example.com")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == customer["id"]
        assert client.get("/clientes/email/missing@example.com").status_code == 404

    def test_update_to_taken_email(self, client, create_customer):
        create_customer(email="taken@example.com")
        other = create_customer(email="other@example.com")

        response = client.put(f"/clientes/{other['id']}", json={"email": "taken@example.com"})
        assert response.status_code == 409

        response = client.put(f"/clientes/{other['id']}", json={"name": "Renamed"})
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Renamed"

    def test_delete_then_missing(self, client, create_customer):
        customer = create_customer()

        assert client.delete(f"/clientes/{customer['id']}").status_code == 200
        assert client.delete(f"/clientes/{customer['id']}").status_code == 404

    def test_list(self, client, create_customer):
        create_customer(name="Maria", email="m@shop.com")
        create_customer(name="Pedro", email="p@shop.com")

        data = client.get("/clientes", params={"order_by": "name", "order_direction": "asc"}).json()["data"]

        assert [c["name"] for c in data["customers"]] == ["Maria", "Pedro"]
        assert data["pagination"]["total_items"] == 2
