"""
API tests through the FastAPI test client.

Routes run against the in-memory fixture services (see conftest.py).

Run: pytest tests/test_api.py -v
"""

from unittest.mock import patch, MagicMock

from routes.config import PASSWORD_MASK

BANDAGE = "{ bandage = { label = 'Bandage', weight = 115, rarity = 3 } }"
HOOK_URL = "https://discord.com/api/webhooks/1/abc"


class TestRoot:

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_lists_endpoints(self, test_client):
        assert test_client.get("/").json()["endpoints"]["items"] == "/api/items"


class TestBusinessesApi:

    def test_list(self, test_client):
        body = test_client.get("/api/businesses").json()

        assert body["total"] == 3

    def test_list_filtered(self, test_client):
        body = test_client.get("/api/businesses", params={"estado": "vendido"}).json()

        assert [b["id"] for b in body["data"]] == [1, 3]

    def test_invalid_filter_rejected(self, test_client):
        assert test_client.get("/api/businesses", params={"tipo": "barco"}).status_code == 422

    def test_get_not_found_error_body(self, test_client):
        response = test_client.get("/api/businesses/99")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "BUSINESS_NOT_FOUND"
        assert error["details"] == {"id": 99}

    def test_create_update_delete(self, test_client):
        created = test_client.post("/api/businesses", json={
            "nombre": "Ferretería Central",
            "tipo": "ferreteria",
            "monto": 90000,
        })
        assert created.status_code == 201
        business_id = created.json()["id"]

        updated = test_client.patch(f"/api/businesses/{business_id}", json={
            "estado": "vendido",
            "comprador_nombre": "Pedro",
        })
        assert updated.status_code == 200
        assert updated.json()["fecha_venta"] is not None

        assert test_client.delete(f"/api/businesses/{business_id}").status_code == 204
        assert test_client.get(f"/api/businesses/{business_id}").status_code == 404

    def test_business_items(self, test_client):
        body = test_client.get("/api/businesses/2/items").json()

        assert [i["nombre"] for i in body["data"]] == ["Hamburguesa Clásica"]

    def test_business_items_unknown_business(self, test_client):
        assert test_client.get("/api/businesses/99/items").status_code == 404


class TestItemsApi:

    def test_import_preview_stores_nothing(self, test_client):
        response = test_client.post("/api/items/import/preview", json={"content": BANDAGE})

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["items"][0]["id"] == "bandage"
        assert body["items"][0]["rarity"] == 3
        assert body["code"].startswith("return {\n\n\t['bandage'] = {")
        assert test_client.get("/api/items").json()["total"] == 2

    def test_import_preview_reports_errors(self, test_client):
        body = test_client.post("/api/items/import/preview", json={"content": "???"}).json()

        assert body["success"] is False
        assert body["code"] is None
        assert body["errors"][0].startswith("Unrecognized format")

    def test_import_then_export(self, test_client):
        response = test_client.post("/api/items/import", json={"content": BANDAGE, "negocio_id": 2})

        assert response.status_code == 201
        body = response.json()
        assert body["created"] == 1
        item_id = body["items"][0]["id"]

        code = test_client.get(f"/api/items/{item_id}/code").json()["code"]
        assert code == (
            "['bandage'] = {\n"
            "\t\tlabel = 'Bandage',\n"
            "\t\tweight = 115,\n"
            "\t\trarity = 3\n"
            "\t}"
        )

    def test_import_empty_content(self, test_client):
        response = test_client.post("/api/items/import", json={"content": ""})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "ITEM_IMPORT_FAILED"
        assert error["details"]["errors"] == ["Content is empty"]

    def test_export_filtered(self, test_client):
        body = test_client.get("/api/items/export", params={"tipo": "comestible"}).json()

        assert body["count"] == 1
        assert "['hamburguesa_clasica']" in body["code"]

    def test_counts(self, test_client):
        body = test_client.get("/api/items/counts").json()

        assert body == {"total": 2, "comestible": 1, "otros": 1, "imported": 0}

    def test_preview_form(self, test_client):
        response = test_client.post("/api/items/preview", json={"nombre": "Pan Dulce", "degrade": 0})

        assert response.json()["code"] == "['pan_dulce'] = {\n\t\tlabel = 'Pan Dulce'\n\t}"

    def test_create_update_delete(self, test_client):
        created = test_client.post("/api/items", json={
            "nombre": "Café",
            "negocio_id": 2,
            "tipo": "comestible",
            "vencimiento_horas": 6,
        })
        assert created.status_code == 201
        item = created.json()
        assert item["original_id"] == "cafe"

        updated = test_client.patch(f"/api/items/{item['id']}", json={"weight": 250})
        assert updated.json()["weight"] == 250

        assert test_client.delete(f"/api/items/{item['id']}").status_code == 204
        assert test_client.get(f"/api/items/{item['id']}").status_code == 404

    def test_create_validation_error(self, test_client):
        assert test_client.post("/api/items", json={"negocio_id": 2}).status_code == 422


class TestSalesApi:

    def test_list(self, test_client):
        body = test_client.get("/api/sales").json()

        assert body["total"] == 2
        assert body["monto_total"] == 330000

    def test_list_by_day(self, test_client):
        body = test_client.get("/api/sales", params={"fecha": "2024-01-15"}).json()

        assert [s["comprador_nombre"] for s in body["data"]] == ["Juan Pérez"]

    def test_statistics(self, test_client):
        body = test_client.get("/api/sales/statistics").json()

        assert body["total_negocios"] == 3
        assert body["items_totales"] == 2

    def test_export_csv(self, test_client):
        response = test_client.get("/api/sales/export", params={"format": "csv"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'attachment; filename="ventas_' in response.headers["content-disposition"]
        assert response.text.splitlines()[0] == "ID,Negocio,Comprador,Monto,Fecha"

    def test_dashboard(self, test_client):
        body = test_client.get("/api/dashboard").json()

        assert len(body["businesses_by_type"]) == 6
        assert body["recent_businesses"][0]["id"] == 3


class TestWebhooksApi:

    def test_register_list_update_delete(self, test_client):
        created = test_client.post("/api/webhooks", json={"tipo_evento": "negocio_creado", "url": HOOK_URL})
        assert created.status_code == 201
        webhook_id = created.json()["id"]

        assert [w["id"] for w in test_client.get("/api/webhooks").json()] == [webhook_id]

        updated = test_client.patch(f"/api/webhooks/{webhook_id}", json={"activo": False})
        assert updated.json()["activo"] is False

        assert test_client.delete(f"/api/webhooks/{webhook_id}").status_code == 204
        assert test_client.delete(f"/api/webhooks/{webhook_id}").status_code == 404

    def test_invalid_url(self, test_client):
        response = test_client.post("/api/webhooks", json={"tipo_evento": "item_creado", "url": "nope"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "WEBHOOK_INVALID_URL"

    @patch("integrations.discord.requests.post")
    def test_business_creation_fires_webhook(self, mock_post, test_client):
        mock_post.return_value = MagicMock(status_code=204)
        test_client.post("/api/webhooks", json={"tipo_evento": "negocio_creado", "url": HOOK_URL})

        test_client.post("/api/businesses", json={"nombre": "Taller", "tipo": "mecanico", "monto": 1})

        mock_post.assert_called_once()
        assert mock_post.call_args.args[0] == HOOK_URL

    @patch("integrations.discord.requests.post")
    def test_send_and_test(self, mock_post, test_client):
        mock_post.return_value = MagicMock(status_code=204)
        webhook_id = test_client.post(
            "/api/webhooks", json={"tipo_evento": "venta_realizada", "url": HOOK_URL}
        ).json()["id"]

        sent = test_client.post("/api/webhooks/send", json={"tipo_evento": "venta_realizada", "data": {"negocio": "X"}})
        tested = test_client.post(f"/api/webhooks/{webhook_id}/test")

        assert sent.json() == {"success": 1, "failed": 0}
        assert tested.json() == {"sent": True}


class TestJobsAndConfigApi:

    def test_jobs_without_config(self, test_client):
        response = test_client.get("/api/jobs")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "DATABASE_NOT_CONFIGURED"

    def test_config_password_is_masked(self, test_client, job_service):
        saved = test_client.put("/api/config/database", json={
            "host": "10.0.0.5",
            "username": "admin",
            "password": "secret",
            "database": "oneway",
        })

        assert saved.json()["password"] == PASSWORD_MASK
        assert test_client.get("/api/config/database").json()["password"] == PASSWORD_MASK
        assert job_service.get_config().password == "secret"

    def test_masked_password_keeps_stored(self, test_client, job_service):
        body = {"host": "h", "username": "u", "password": "secret", "database": "d"}
        test_client.put("/api/config/database", json=body)

        test_client.put("/api/config/database", json={**body, "host": "h2", "password": PASSWORD_MASK})

        config = job_service.get_config()
        assert (config.host, config.password) == ("h2", "secret")

    def test_connection_test_without_config(self, test_client):
        body = test_client.post("/api/config/database/test").json()

        assert body == {"success": False, "message": "No database configuration"}

    def test_stats_without_config(self, test_client):
        assert test_client.get("/api/config/database/stats").json() == {"jobs": 0, "connected": False}

    @patch("integrations.jobs_gateway.requests.request")
    def test_list_jobs(self, mock_request, test_client):
        test_client.put("/api/config/database", json={
            "host": "h", "username": "u", "password": "p", "database": "d",
        })
        response = MagicMock(ok=True, status_code=200)
        response.json.return_value = [{"id": 1, "name": "police", "type": "leo"}]
        mock_request.return_value = response

        body = test_client.get("/api/jobs", params={"type": "leo"}).json()

        assert body["total"] == 1
        assert body["data"][0]["name"] == "police"
