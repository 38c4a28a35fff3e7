"""Tests for the generic catalog resources (background, mostri, ...)."""

from __future__ import annotations

import pytest

from catalogo import repository
from catalogo.resources import BY_PATH, RESOURCES
from core.pagination import ListFilter


def _row(**overrides) -> dict:
    row = {
        "id": "accecato",
        "nome": "Accecato",
        "descrizione": None,
        "documentazione_di_riferimento": "DND 2024",
    }
    row.update(overrides)
    return row


def test_registry_is_complete():
    assert [r.path for r in RESOURCES] == [
        "background",
        "bastioni",
        "condizioni",
        "divinita",
        "linguaggi",
        "maestrie",
        "mostri",
        "oggetti",
        "regole",
        "specie",
        "talenti",
    ]


async def test_repository_uses_resource_table(fake_db):
    fake_db["fetch_val"].return_value = 1
    fake_db["fetch_all"].return_value = [_row()]

    items, total = await repository.list_voci(BY_PATH["condizioni"], ListFilter(nome="acc"))

    assert total == 1
    assert items[0].id == "accecato"
    assert fake_db["fetch_val"].await_args.args == (
        "SELECT COUNT(*) FROM condizioni WHERE 1=1 AND nome ILIKE $1",
        "%acc%",
    )


@pytest.mark.parametrize("resource", RESOURCES, ids=lambda r: r.path)
async def test_list_envelope_key(resource, fake_db, client):
    fake_db["fetch_val"].return_value = 1
    fake_db["fetch_all"].return_value = [_row(descrizione="Non vede.")]

    resp = await client.get(f"/v1/{resource.path}")

    assert resp.status_code == 200
    assert resp.json() == {
        "pagina": 1,
        "numero-di-elementi": 1,
        resource.envelope: [
            {
                "id": "accecato",
                "nome": "Accecato",
                "descrizione": "Non vede.",
                "documentazione-di-riferimento": "DND 2024",
            }
        ],
    }


@pytest.mark.parametrize("resource", RESOURCES, ids=lambda r: r.path)
async def test_not_found_names_kind(resource, fake_db, client):
    resp = await client.get(f"/v1/{resource.path}/inesistente")

    assert resp.status_code == 404
    assert resp.json()["errors"][0]["detail"] == f"{resource.kind} with id 'inesistente' not found"


async def test_get_omits_null_description(fake_db, client):
    fake_db["fetch_one"].return_value = _row()

    resp = await client.get("/v1/condizioni/accecato")

    assert resp.status_code == 200
    assert resp.json() == {
        "id": "accecato",
        "nome": "Accecato",
        "documentazione-di-riferimento": "DND 2024",
    }
    sql, arg = fake_db["fetch_one"].await_args.args
    assert "FROM condizioni WHERE id = $1" in sql
    assert arg == "accecato"


async def test_invalid_id_uses_resource_param_name(fake_db, client):
    resp = await client.get("/v1/mostri/drago.rosso")

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["detail"].startswith("id-mostro contains invalid characters")


async def test_db_failure_is_500(fake_db, client):
    fake_db["fetch_val"].side_effect = OSError("boom")

    resp = await client.get("/v1/talenti")

    assert resp.status_code == 500
    assert resp.json()["errors"][0]["code"] == "INTERNAL_ERROR"
