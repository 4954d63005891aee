from datetime import datetime

from legacy_claims.services import delete_legacy_client, legacy_stats, list_legacy_clients
from legacy_claims.services.legacy_admin import parse_claimed_filter


def _boxes(payload):
    return [c["box_id"] for c in payload["clients"]]


def test_single_word_search_puts_exact_box_first(app, add_legacy) -> None:
    add_legacy("S100", full_name="Ana Ruiz")
    add_legacy("S10", full_name="Luis Gomez")
    add_legacy("S1", full_name="Pedro Mora")
    add_legacy("X9", full_name="Contacto S1 Sur")
    add_legacy("X8", full_name="Nadie", email="nadie@mail.com")

    payload = list_legacy_clients(search="s1")
    assert _boxes(payload) == ["S1", "X9", "S10", "S100"]
    assert payload["pagination"] == {"page": 1, "limit": 50, "total": 4, "totalPages": 1}


def test_single_word_search_matches_email(app, add_legacy) -> None:
    add_legacy("S1", full_name="Pedro Mora", email="pedro@empresa.mx")
    add_legacy("S2", full_name="Ana Ruiz", email="ana@mail.com")
    assert _boxes(list_legacy_clients(search="EMPRESA")) == ["S1"]


def test_multi_word_search_needs_every_word_in_the_name(app, add_legacy) -> None:
    add_legacy("S1", full_name="Juan Perez Garcia", created_at=datetime(2024, 1, 1))
    add_legacy("S2", full_name="Juan Lopez", created_at=datetime(2024, 1, 2))
    add_legacy("S3", full_name="Maria Garcia Juan", created_at=datetime(2024, 1, 3))

    payload = list_legacy_clients(search="juan  garcia")
    assert _boxes(payload) == ["S3", "S1"]
    assert payload["pagination"]["total"] == 2


def test_unfiltered_listing_is_newest_first_and_paginated(app, add_legacy) -> None:
    for day in range(1, 6):
        add_legacy(f"S{day}", created_at=datetime(2024, 1, day))

    page_one = list_legacy_clients(page=1, limit=2)
    page_three = list_legacy_clients(page="3", limit="2")
    assert _boxes(page_one) == ["S5", "S4"]
    assert _boxes(page_three) == ["S1"]
    assert page_one["pagination"] == {"page": 1, "limit": 2, "total": 5, "totalPages": 3}


def test_bad_paging_values_fall_back_to_defaults(app) -> None:
    payload = list_legacy_clients(page="abc", limit="100000")
    assert payload["pagination"]["page"] == 1
    assert payload["pagination"]["limit"] == 500


def test_claimed_filter_and_claimer_name(app, add_legacy, add_user) -> None:
    user_id = add_user("pedro@mail.com", full_name="Pedro Mora")
    add_legacy("S1", full_name="Pedro Mora", is_claimed=True, claimed_by_user_id=user_id, claimed_at=datetime(2025, 5, 1))
    add_legacy("S2", full_name="Ana Ruiz")

    claimed = list_legacy_clients(claimed=True)
    assert _boxes(claimed) == ["S1"]
    assert claimed["clients"][0]["claimed_by_name"] == "Pedro Mora"
    assert claimed["clients"][0]["claimed_at"] == "2025-05-01T00:00:00"

    assert _boxes(list_legacy_clients(claimed=False)) == ["S2"]


def test_parse_claimed_filter() -> None:
    assert parse_claimed_filter("true") is True
    assert parse_claimed_filter("FALSE") is False
    assert parse_claimed_filter(None) is None
    assert parse_claimed_filter("maybe") is None


def test_stats(app, add_legacy, add_user) -> None:
    user_id = add_user("pedro@mail.com")
    add_legacy("S1", is_claimed=True, claimed_by_user_id=user_id)
    add_legacy("S2")
    add_legacy("S3")
    assert legacy_stats() == {"total": 3, "claimed": 1, "pending": 2}


def test_stats_on_empty_table(app) -> None:
    assert legacy_stats() == {"total": 0, "claimed": 0, "pending": 0}


def test_delete_refuses_claimed_records(app, add_legacy, add_user) -> None:
    user_id = add_user("pedro@mail.com")
    claimed_id = add_legacy("S1", is_claimed=True, claimed_by_user_id=user_id)
    pending_id = add_legacy("S2")

    assert delete_legacy_client(claimed_id) is False
    assert delete_legacy_client(pending_id) is True
    assert delete_legacy_client(pending_id) is False
    assert legacy_stats() == {"total": 1, "claimed": 1, "pending": 0}
