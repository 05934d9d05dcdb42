class TestProductsApi:

    def test_create_returns_envelope(self, client):
        response = client.post("/produtos", json={"name": "Widget", "price": 9.999})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Product created successfully"
        assert body["data"]["price"] == 10.0
        assert body["data"]["stock"] == 0
        assert isinstance(body["data"]["id"], int)
        assert body["data"]["created_at"]

    def test_create_invalid_payload(self, client):
        response = client.post("/produtos", json={"name": "Widget", "price": -1})

        assert response.status_code == 400
        error = response.json()["error"]
        assert response.json()["success"] is False
        assert error["status"] == 400
        assert error["code"] == "validation_error"
        assert error["fields"] == ["price"]

    def test_malformed_json(self, client):
        response = client.post(
            "/produtos", content=b'{"name": "Widget", ', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_missing_body(self, client):
        response = client.post("/produtos")

        assert response.status_code == 400
        assert response.json()["error"]["fields"] == ["body"]

    def test_get_update_delete(self, client, create_product):
        product = create_product(name="Lamp", price=20.0, stock=3)
        url = f"/produtos/{product['id']}"

        assert client.get(url).json()["data"]["name"] == "Lamp"

        response = client.put(url, json={"price": 15.555})
        assert response.status_code == 200
        assert response.json()["data"]["price"] == 15.56
        assert response.json()["data"]["stock"] == 3

        response = client.delete(url)
        assert response.status_code == 200
        assert response.json()["data"] is None

        response = client.get(url)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Product not found"

    def test_invalid_id(self, client):
        response = client.get("/produtos/abc")

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid id"

    def test_list_with_pagination_and_search(self, client, create_product):
        for i in range(3):
            create_product(name=f"Widget {i}")
        create_product(name="Gadget")

        response = client.get("/produtos", params={"search": "widget", "limit": 2, "page": 2})

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["products"]) == 1
        assert data["pagination"] == {
            "current_page": 2,
            "per_page": 2,
            "total_items": 3,
            "total_pages": 2,
            "has_next": False,
            "has_prev": True,
        }

    def test_list_rejects_bad_limit(self, client):
        assert client.get("/produtos", params={"limit": 0}).status_code == 400
        assert client.get("/produtos", params={"limit": 101}).status_code == 400

    def test_low_stock(self, client, create_product):
        create_product(name="a", stock=0)
        create_product(name="b", stock=5)
        create_product(name="c", stock=6)

        default = client.get("/produtos/estoque-baixo").json()["data"]
        custom = client.get("/produtos/estoque-baixo", params={"limite": 0}).json()["data"]

        assert [p["name"] for p in default] == ["a", "b"]
        assert [p["name"] for p in custom] == ["a"]

    def test_update_stock(self, client, create_product):
        product = create_product(stock=1)

        response = client.patch(f"/produtos/{product['id']}/estoque", json={"quantidade": 25})
        assert response.status_code == 200
        assert response.json()["data"]["stock"] == 25

        response = client.patch(f"/produtos/{product['id']}/estoque", json={"quantidade": -1})
        assert response.status_code == 400

    def test_stock_availability(self, client, create_product):
        product = create_product(stock=4)

        ok = client.get(f"/produtos/{product['id']}/disponibilidade", params={"quantidade": 4})
        too_many = client.get(f"/produtos/{product['id']}/disponibilidade", params={"quantidade": 5})

        assert ok.json()["data"] == {"available": True}
        assert too_many.json()["data"] == {"available": False}

    def test_out_of_range_numbers_are_client_errors(self, client, create_product):
        """
        Behavior:
                - price 1e30 and stock 2**70 are answered with 400 envelopes.
                - A PATCH of stock beyond the SQLite integer range is also a 400.

        Importance:
                - Input the storage cannot hold must be rejected before it reaches the driver.
        """
        response = client.post("/produtos", json={"name": "Big", "price": 1e30})
        assert response.status_code == 400
        assert response.json()["error"]["fields"] == ["price"]

        response = client.post("/produtos", json={"name": "Big", "price": 1, "stock": 2**70})
        assert response.status_code == 400
        assert response.json()["error"]["fields"] == ["stock"]

        product = create_product()
        response = client.patch(f"/produtos/{product['id']}/estoque", json={"quantidade": 2**64})
        assert response.status_code == 400

        assert client.get(f"/produtos/{2**70}").status_code == 400
