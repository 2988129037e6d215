from decimal import Decimal

from conftest import build_product


class TestStorefront:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_list_and_get(self, client, db):
        db.add_all([
            build_product(name="Textbook", price=Decimal("45.00"), likes=3, class_num=10),
            build_product(name="Calculator", price=Decimal("120.00"), likes=9, class_num=11),
            build_product(name="Hidden", is_active=False),
        ])
        db.commit()

        products = client.get("/products").json()
        assert [p["name"] for p in products] == ["Calculator", "Textbook"]
        assert products[0]["price"] == "120.00"
        assert products[0]["sellerName"] == "Sarah Wilson"

        cheap_first = client.get("/products", params={"sort": "price-low"}).json()
        assert [p["name"] for p in cheap_first] == ["Textbook", "Calculator"]

        grade_ten = client.get("/products", params={"class": 10}).json()
        assert [p["name"] for p in grade_ten] == ["Textbook"]

        detail = client.get(f"/products/{products[0]['id']}").json()
        assert detail["name"] == "Calculator"

    def test_bad_filters(self, client, db):
        assert client.get("/products", params={"class": 3}).status_code == 400
        assert client.get("/products", params={"sort": "random"}).status_code == 400

    def test_unknown_product(self, client, db):
        assert client.get("/products/missing").status_code == 404
        assert client.post("/products/missing/like").status_code == 404

    def test_like(self, client, sql_product):
        assert client.post(f"/products/{sql_product.id}/like").json() == {"likes": 1}
        assert client.post(f"/products/{sql_product.id}/like").json() == {"likes": 2}


class TestSellers:

    def test_submit_and_list(self, client, db):
        body = {
            "name": "Hindi Workbook",
            "price": "20",
            "class": 6,
            "section": "A",
            "sellerId": "seller_77",
            "sellerName": "Meera",
            "sellerPhone": "9000000000",
        }
        resp = client.post("/sellers/products", json=body)
        assert resp.status_code == 201

        mine = client.get("/sellers/seller_77/products").json()
        assert len(mine) == 1
        assert mine[0]["price"] == "20.00"
        assert mine[0]["approvalStatus"] == "pending"

    def test_invalid_submission(self, client, db):
        body = {"name": "x", "price": "20.5", "class": 6, "section": "A", "sellerName": "M", "sellerPhone": "1"}
        assert client.post("/sellers/products", json=body).status_code == 400
