"""
HTTP tests — full request/response cycle through the FastAPI app.

Covers:
  - Public inscription (JSON, form, photo uploads, rejected uploads)
  - Admin login and bearer-token enforcement
  - Admin list / bulk import / spreadsheet import / delete / stats
  - Excel export and Google Sheets configuration check
  - Swapping the admin auth provider
"""
from __future__ import annotations

from io import BytesIO
from typing import Optional

import httpx
import pytest
from openpyxl import Workbook, load_workbook

from buenafe.main import create_app
from buenafe.middlewares import AdminAuthProvider
from buenafe.services.spreadsheet_service import XLSX_MEDIA_TYPE

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# ─── Helpers ──────────────────────────────────────────────────────────────────

async def _register(client: httpx.AsyncClient, data: dict) -> httpx.Response:
    return await client.post("/api/inscripcion", json=data)


async def _total(client: httpx.AsyncClient, headers: dict) -> int:
    resp = await client.get("/api/admin/stats", headers=headers)
    return resp.json()["total"]


def _xlsx(rows) -> bytes:
    wb = Workbook()
    for row in rows:
        wb.active.append(row)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


# ─── Inscription ──────────────────────────────────────────────────────────────

class TestInscription:
    async def test_register_and_list(self, client, admin_headers) -> None:
        resp = await _register(client, {
            "fullName":   "Ana Gomez",
            "dni":        "1234567",
            "playerType": "socio",
            "teamName":   "halcones",
            "category":   "mayores",
        })
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "message": "Inscripción guardada exitosamente.",
            "id":      1,
        }

        resp = await client.get("/api/admin/players", headers=admin_headers)
        assert resp.status_code == 200
        (player,) = resp.json()
        assert player["id"] == 1
        assert player["fullName"] == "Ana Gomez"
        assert player["createdAt"] is not None
        assert player["socioName"] is None

    async def test_form_encoded(self, client, admin_headers, make_player) -> None:
        resp = await client.post("/api/inscripcion", data=make_player(fullName="Beto"))
        assert resp.status_code == 200

        players = (await client.get("/api/admin/players", headers=admin_headers)).json()
        assert players[0]["fullName"] == "Beto"
        assert players[0]["dniPlayerPath"] is None

    async def test_photo_upload_is_stored_and_served(
        self, client, admin_headers, make_player,
    ) -> None:
        resp = await client.post(
            "/api/inscripcion",
            data=make_player(),
            files={"dniPlayerFile": ("cedula.PNG", PNG_BYTES, "image/png")},
        )
        assert resp.status_code == 200

        (player,) = (await client.get("/api/admin/players", headers=admin_headers)).json()
        path = player["dniPlayerPath"]
        assert path.startswith("/UPLOAD/")
        assert path.endswith(".png")
        assert player["dniSocioPath"] is None

        served = await client.get(path)
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    async def test_rejects_unsupported_photo(self, client, admin_headers, make_player) -> None:
        resp = await client.post(
            "/api/inscripcion",
            data=make_player(),
            files={"dniPlayerFile": ("cedula.gif", b"GIF89a", "image/gif")},
        )
        assert resp.status_code == 400
        assert resp.json()["success"] is False

        players = (await client.get("/api/admin/players", headers=admin_headers)).json()
        assert players == []

    async def test_missing_guarantor_is_stored(self, client, admin_headers, make_player) -> None:
        resp = await _register(client, make_player(playerType="conyuge"))
        assert resp.status_code == 200
        assert resp.json()["success"] is True

        (player,) = (await client.get("/api/admin/players", headers=admin_headers)).json()
        assert player["playerType"] == "conyuge"
        assert player["socioName"] is None
        assert player["socioDni"] is None

    async def test_guarantor_supplied(self, client, make_player) -> None:
        resp = await _register(client, make_player(
            playerType="adherente",
            socioName="Luis Gomez",
            socioDni="7654321",
            socioPhone="0997654321",
        ))
        assert resp.status_code == 200

    @pytest.mark.parametrize("player_type", ["invitado", "Socio"])
    async def test_player_type_stored_as_sent(
        self, client, admin_headers, make_player, player_type,
    ) -> None:
        resp = await _register(client, make_player(playerType=player_type))
        assert resp.status_code == 200

        (player,) = (await client.get("/api/admin/players", headers=admin_headers)).json()
        assert player["playerType"] == player_type

    async def test_missing_player_type_defaults_to_socio(self, client, admin_headers) -> None:
        resp = await _register(client, {"fullName": "Ana Gomez"})
        assert resp.status_code == 200

        (player,) = (await client.get("/api/admin/players", headers=admin_headers)).json()
        assert player["playerType"] == "socio"

    async def test_malformed_json(self, client) -> None:
        resp = await client.post(
            "/api/inscripcion",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Datos inválidos"}


# ─── Admin auth ───────────────────────────────────────────────────────────────

class TestAdminAuth:
    async def test_login_ok(self, client) -> None:
        resp = await client.post("/api/admin/login", json={"password": "admin123"})
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "token": "admin123"}

    async def test_login_wrong_password(self, client) -> None:
        resp = await client.post("/api/admin/login", json={"password": "nope"})
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "message": "Contraseña incorrecta"}

    async def test_login_missing_password(self, client) -> None:
        resp = await client.post("/api/admin/login", json={})
        assert resp.status_code == 401

    @pytest.mark.parametrize("headers", [
        {},
        {"Authorization": "Bearer wrong"},
        {"Authorization": "admin123"},
        {"Authorization": "Basic admin123"},
    ])
    async def test_admin_routes_require_token(self, client, headers) -> None:
        for method, url in [
            ("GET", "/api/admin/players"),
            ("GET", "/api/admin/stats"),
            ("DELETE", "/api/admin/players/1"),
            ("GET", "/api/admin/players/export"),
        ]:
            resp = await client.request(method, url, headers=headers)
            assert resp.status_code == 401, url
            assert resp.json() == {"success": False, "message": "No autorizado"}

    async def test_custom_auth_provider(self, settings) -> None:
        class OnlyTokenX(AdminAuthProvider):
            def login(self, password: Optional[str]) -> Optional[str]:
                return "token-x" if password == "pw" else None

            def verify(self, authorization: Optional[str]) -> bool:
                return authorization == "Bearer token-x"

        app = create_app(settings, auth=OnlyTokenX())
        transport = httpx.ASGITransport(app=app)
        try:
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
                login = await ac.post("/api/admin/login", json={"password": "pw"})
                assert login.json()["token"] == "token-x"

                ok = await ac.get("/api/admin/players", headers={"Authorization": "Bearer token-x"})
                assert ok.status_code == 200
                denied = await ac.get("/api/admin/players", headers={"Authorization": "Bearer admin123"})
                assert denied.status_code == 401
        finally:
            await app.state.store.dispose()


# ─── Admin players ────────────────────────────────────────────────────────────

class TestAdminPlayers:
    async def test_bulk_import(self, client, admin_headers) -> None:
        resp = await client.post("/api/admin/players/bulk", headers=admin_headers, json={
            "players": [
                {"fullName": "Ana", "dni": "1", "teamName": "halcones"},
                {"fullName": "Beto", "dni": "2", "teamName": "leones", "playerType": "adherente"},
            ],
        })
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "message": "2 jugadores importados correctamente.",
            "count":   2,
        }

        players = (await client.get("/api/admin/players", headers=admin_headers)).json()
        types = {p["fullName"]: p["playerType"] for p in players}
        assert types == {"Ana": "socio", "Beto": "adherente"}

    async def test_bulk_empty_list(self, client, admin_headers) -> None:
        resp = await client.post("/api/admin/players/bulk", headers=admin_headers, json={"players": []})
        assert resp.status_code == 200
        assert resp.json()["count"] == 0

    @pytest.mark.parametrize("body", [{}, {"players": "Ana"}, {"players": [1, 2]}])
    async def test_bulk_bad_payload(self, client, admin_headers, body) -> None:
        resp = await client.post("/api/admin/players/bulk", headers=admin_headers, json=body)
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    async def test_spreadsheet_import(self, client, admin_headers) -> None:
        data = _xlsx([
            ["NOMBRE COMPLETO", "CÉDULA", "EQUIPO", "CATEGORÍA", "CAMISETA"],
            ["Ana Gomez", 1234567, "halcones", "Mayores", 10],
            ["Beto Ruiz", 7654321, "leones", "Mayores", 7],
        ])
        resp = await client.post(
            "/api/admin/players/import",
            headers=admin_headers,
            files={"file": ("lista.xlsx", data, XLSX_MEDIA_TYPE)},
        )
        assert resp.status_code == 200
        assert resp.json()["count"] == 2

        players = (await client.get("/api/admin/players", headers=admin_headers)).json()
        by_name = {p["fullName"]: p for p in players}
        assert by_name["Ana Gomez"]["dni"] == "1234567"
        assert by_name["Ana Gomez"]["jerseyNumber"] == "10"
        assert by_name["Ana Gomez"]["category"] == "mayores"
        assert by_name["Beto Ruiz"]["playerType"] == "socio"

    async def test_spreadsheet_import_empty(self, client, admin_headers) -> None:
        resp = await client.post(
            "/api/admin/players/import",
            headers=admin_headers,
            files={"file": ("lista.xlsx", _xlsx([["NOMBRE COMPLETO"]]), XLSX_MEDIA_TYPE)},
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "El archivo está vacío"

    async def test_spreadsheet_import_not_excel(self, client, admin_headers) -> None:
        resp = await client.post(
            "/api/admin/players/import",
            headers=admin_headers,
            files={"file": ("lista.xlsx", b"plain text", "text/plain")},
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "No se pudo leer el archivo Excel"

    async def test_delete(self, client, admin_headers, make_player) -> None:
        first = (await _register(client, make_player(fullName="Ana"))).json()["id"]
        await _register(client, make_player(fullName="Beto"))
        before = await _total(client, admin_headers)

        resp = await client.delete(f"/api/admin/players/{first}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Jugador eliminado"}

        players = (await client.get("/api/admin/players", headers=admin_headers)).json()
        assert [p["fullName"] for p in players] == ["Beto"]
        assert await _total(client, admin_headers) == before - 1

    async def test_delete_unknown_id_still_succeeds(self, client, admin_headers, make_player) -> None:
        await _register(client, make_player())
        before = await _total(client, admin_headers)

        resp = await client.delete("/api/admin/players/999", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["success"] is True
        assert await _total(client, admin_headers) == before

    async def test_bulk_import_raises_total_by_n(self, client, admin_headers, make_player) -> None:
        await _register(client, make_player())
        before = await _total(client, admin_headers)

        resp = await client.post("/api/admin/players/bulk", headers=admin_headers, json={
            "players": [{"fullName": f"Jugador {i}"} for i in range(4)],
        })
        assert resp.json()["count"] == 4
        assert await _total(client, admin_headers) == before + 4

    async def test_delete_non_numeric_id(self, client, admin_headers) -> None:
        resp = await client.delete("/api/admin/players/abc", headers=admin_headers)
        assert resp.status_code == 400

    async def test_list_filters(self, client, admin_headers, make_player) -> None:
        await _register(client, make_player(fullName="Ana", teamName="halcones", category="mayores"))
        await _register(client, make_player(fullName="Beto", teamName="leones", category="mayores"))
        await _register(client, make_player(fullName="Carla", teamName="halcones", category="juveniles"))

        async def names(**params) -> list:
            resp = await client.get("/api/admin/players", headers=admin_headers, params=params)
            return sorted(p["fullName"] for p in resp.json())

        assert await names() == ["Ana", "Beto", "Carla"]
        assert await names(q="carl") == ["Carla"]
        assert await names(category="MAYORES") == ["Ana", "Beto"]
        assert await names(team="halcones", category="juveniles") == ["Carla"]


# ─── Stats ────────────────────────────────────────────────────────────────────

class TestStats:
    async def test_empty(self, client, admin_headers) -> None:
        resp = await client.get("/api/admin/stats", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json() == {"byTeam": [], "byCategory": [], "total": 0}

    async def test_counts(self, client, admin_headers, make_player) -> None:
        await _register(client, make_player(teamName="halcones", category="mayores"))
        await _register(client, make_player(teamName="halcones", category="juveniles"))
        await _register(client, make_player(teamName="leones", category="mayores"))

        stats = (await client.get("/api/admin/stats", headers=admin_headers)).json()
        assert stats["total"] == 3
        assert {g["teamName"]: g["count"] for g in stats["byTeam"]} == {"halcones": 2, "leones": 1}
        assert {g["category"]: g["count"] for g in stats["byCategory"]} == {
            "mayores": 2, "juveniles": 1,
        }


# ─── Export ───────────────────────────────────────────────────────────────────

class TestExport:
    async def test_excel_download(self, client, admin_headers, make_player) -> None:
        await _register(client, make_player(fullName="Ana", category="mayores"))
        await _register(client, make_player(fullName="Carla", category="juveniles"))

        resp = await client.get("/api/admin/players/export", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == XLSX_MEDIA_TYPE
        assert "LISTA_BUENA_FE_AFEMEC_" in resp.headers["content-disposition"]

        wb = load_workbook(BytesIO(resp.content))
        assert sorted(wb.sheetnames) == ["JUVENILES", "MAYORES"]

    async def test_excel_respects_filters(self, client, admin_headers, make_player) -> None:
        await _register(client, make_player(fullName="Ana", category="mayores"))
        await _register(client, make_player(fullName="Carla", category="juveniles"))

        resp = await client.get(
            "/api/admin/players/export",
            headers=admin_headers,
            params={"category": "juveniles"},
        )
        wb = load_workbook(BytesIO(resp.content))
        assert wb.sheetnames == ["JUVENILES"]

    async def test_excel_empty(self, client, admin_headers) -> None:
        resp = await client.get("/api/admin/players/export", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "No hay datos para exportar"}

    async def test_sheets_not_configured(self, client, admin_headers, make_player) -> None:
        await _register(client, make_player())
        resp = await client.post("/api/admin/players/export/sheets", headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Google Sheets no está configurado"
