"""Tests for the spell filters, repository and endpoints."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from core.pagination import ListFilter
from core.validation import ParamError
from incantesimi import filters, repository
from incantesimi.filters import IncantesimiFilter, parse_incantesimi_filter
from incantesimi.schemas import Componente


def _spell_row(**overrides) -> dict:
    row = {
        "id": "palla-di-fuoco",
        "nome": "Palla di Fuoco",
        "livello": 3,
        "scuola_di_magia": "Evocazione",
        "tempo_di_lancio": "Azione",
        "gittata": "45 metri",
        "area": "Sfera di 6 metri",
        "concentrazione": False,
        "sempre_preparato": False,
        "rituale": False,
        "componenti": ["V", "S", "M"],
        "componenti_materiali": "Una pallina di guano di pipistrello e zolfo",
        "durata": "Istantanea",
        "descrizione": "Una scia luminosa...",
        "effetto_incantesimo": json.dumps({"effetto": {"danni": "8d6", "tipo": "fuoco"}}),
        "effetto_livello_maggiore": json.dumps({"ripetizione-effetto": 1, "effetto": {"danni": "1d6"}}),
        "classi": "Mago, Stregone",
        "documentazione_di_riferimento": "DND 2024",
    }
    row.update(overrides)
    return row


class TestParseFilter:
    def test_empty(self):
        assert parse_incantesimi_filter() == IncantesimiFilter()

    def test_all_values(self):
        f = parse_incantesimi_filter(
            livello="3",
            scuola_di_magia="Evocazione",
            concentrazione="false",
            rituale="T",
            componenti=["V", "M"],
            componenti_materiali="guano",
            tempo_di_lancio="Azione",
            gittata="metri",
            durata="Istantanea",
            classi=["Mago", "Stregone"],
        )
        assert f.livello == 3
        assert f.scuola_di_magia == "Evocazione"
        assert f.concentrazione is False
        assert f.rituale is True
        assert f.componenti == ("V", "M")
        assert f.classi == ("Mago", "Stregone")

    @pytest.mark.parametrize(
        ("kwargs", "name"),
        [
            ({"livello": "10"}, "livello"),
            ({"livello": "-1"}, "livello"),
            ({"scuola_di_magia": "Necromanzia"}, "scuola-di-magia"),
            ({"concentrazione": "yes"}, "concentrazione"),
            ({"componenti": ["V", "S", "M", "V"]}, "componenti"),
            ({"componenti": ["X"]}, "componenti"),
            ({"componenti_materiali": "x" * 501}, "componenti-materiali"),
            ({"gittata": "x" * 256}, "gittata"),
            ({"classi": [f"c{i}" for i in range(21)]}, "classi"),
            ({"classi": ["x" * 101]}, "classi"),
        ],
    )
    def test_invalid(self, kwargs, name):
        with pytest.raises(ParamError) as excinfo:
            parse_incantesimi_filter(**kwargs)
        assert excinfo.value.name == name

    def test_school_list_keeps_stored_spelling(self):
        assert parse_incantesimi_filter(scuola_di_magia="Necromamzia").scuola_di_magia == "Necromamzia"

    def test_predicate_table_covers_every_field(self):
        filters.check_predicates()

    def test_missing_predicate_fails_loudly(self, monkeypatch):
        table = dict(filters.SPELL_PREDICATES)
        del table["durata"]
        monkeypatch.setattr(filters, "SPELL_PREDICATES", table)

        with pytest.raises(RuntimeError, match=r"\['durata'\]"):
            filters.check_predicates()


class TestBuildQuery:
    def test_all_predicates(self):
        f = IncantesimiFilter(
            livello=0,
            scuola_di_magia="Evocazione",
            concentrazione=False,
            rituale=True,
            componenti=("V", "S"),
            componenti_materiali="50%",
            durata="1 minuto",
            classi=("Mago", "Chierico"),
        )
        q = repository.build_query(ListFilter(nome="palla"), f)

        assert q.conditions == [
            "1=1",
            "nome ILIKE $1",
            "livello = $2",
            "scuola_di_magia = $3",
            "concentrazione = $4",
            "rituale = $5",
            "componenti @> $6",
            "componenti_materiali ILIKE $7",
            "durata ILIKE $8",
            "classi ILIKE $9",
            "classi ILIKE $10",
        ]
        assert q.count_args() == [
            "%palla%",
            0,
            "Evocazione",
            False,
            True,
            ["V", "S"],
            "%50\\%%",
            "%1 minuto%",
            "%Mago%",
            "%Chierico%",
        ]
        assert q.select_sql().endswith("LIMIT $11 OFFSET $12")


class TestRowMapping:
    def test_full(self):
        spell = repository.row_to_incantesimo(_spell_row())

        assert spell.componenti == [Componente.VERBALE, Componente.SOMATICA, Componente.MATERIALE]
        assert spell.effetto_incantesimo.ripetizione_effetto is None
        assert spell.effetto_incantesimo.effetto == {"danni": "8d6", "tipo": "fuoco"}
        assert spell.effetto_livello_maggiore.ripetizione_effetto == 1

    def test_nullable_fields_are_omitted(self):
        spell = repository.row_to_incantesimo(
            _spell_row(
                area=None,
                componenti=None,
                componenti_materiali=None,
                effetto_incantesimo=None,
                effetto_livello_maggiore=None,
            )
        )
        dumped = spell.model_dump(by_alias=True, exclude_none=True, mode="json")

        assert dumped["componenti"] == []
        for key in ("area", "componenti-materiali", "effetto-incantesimo", "effetto-livello-maggiore"):
            assert key not in dumped


@pytest.fixture
def repo(monkeypatch):
    mocks = {
        "list_incantesimi": AsyncMock(return_value=([], 0)),
        "get_incantesimo": AsyncMock(return_value=None),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(repository, name, mock)
    return mocks


class TestEndpoints:
    async def test_list_with_filters(self, repo, client):
        repo["list_incantesimi"].return_value = ([repository.row_to_incantesimo(_spell_row())], 1)

        resp = await client.get(
            "/v1/incantesimi",
            params=[
                ("livello", "3"),
                ("scuola-di-magia", "Evocazione"),
                ("componenti", "V"),
                ("componenti", "M"),
                ("classi", "Mago"),
            ],
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["numero-di-elementi"] == 1
        item = body["incantesimi"][0]
        assert item["scuola-di-magia"] == "Evocazione"
        assert item["componenti"] == ["V", "S", "M"]
        assert item["effetto-incantesimo"] == {"effetto": {"danni": "8d6", "tipo": "fuoco"}}
        assert item["sempre-preparato"] is False

        _, spell_filter = repo["list_incantesimi"].await_args.args
        assert spell_filter.livello == 3
        assert spell_filter.componenti == ("V", "M")
        assert spell_filter.classi == ("Mago",)

    async def test_bad_spell_filter(self, repo, client):
        resp = await client.get("/v1/incantesimi", params={"rituale": "maybe"})

        assert resp.status_code == 400
        assert resp.json()["errors"][0]["detail"] == "rituale must be a valid boolean"
        repo["list_incantesimi"].assert_not_awaited()

    async def test_universal_params_validated_first(self, repo, client):
        resp = await client.get("/v1/incantesimi", params={"$limit": "0", "livello": "99"})

        assert resp.status_code == 400
        assert resp.json()["errors"][0]["detail"].startswith("$limit")

    async def test_repeated_scalar_takes_first_value(self, repo, client):
        await client.get("/v1/incantesimi", params=[("livello", "3"), ("livello", "99"), ("rituale", "true"), ("rituale", "x")])

        _, spell_filter = repo["list_incantesimi"].await_args.args
        assert spell_filter.livello == 3
        assert spell_filter.rituale is True

    async def test_get_not_found(self, repo, client):
        resp = await client.get("/v1/incantesimi/desiderio")

        assert resp.status_code == 404
        assert resp.json()["errors"][0]["detail"] == "Incantesimo with id 'desiderio' not found"

    async def test_get(self, repo, client):
        repo["get_incantesimo"].return_value = repository.row_to_incantesimo(_spell_row(area=None))

        resp = await client.get("/v1/incantesimi/palla-di-fuoco")

        assert resp.status_code == 200
        assert "area" not in resp.json()
        repo["get_incantesimo"].assert_awaited_once_with("palla-di-fuoco")
