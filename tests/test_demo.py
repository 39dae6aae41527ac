from app.models import Client, Invoice


class TestSeedDemo:
    def test_seeds_client_invoice_and_items(self, client, db, headers, org_id):
        response = client.post("/functions/seed-demo", params={"org": org_id})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True

        invoice = db.get(Invoice, body["invoice"])
        assert invoice.status == "sent"
        assert invoice.amount_subtotal == 1050
        assert invoice.amount_total == 1050
        assert [(i.description, i.amount) for i in invoice.items] == [
            ("Design sprint", 1000),
            ("Hosting", 50),
        ]
        assert db.query(Client).filter(Client.org_id == org_id).one().name == "Acme Inc"

        items = client.get(f"/invoices/{invoice.id}/items", headers=headers).json()
        assert len(items) == 2

    def test_org_is_required(self, client):
        response = client.post("/functions/seed-demo")

        assert response.status_code == 400
        assert response.text == "org required"
