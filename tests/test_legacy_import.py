from datetime import date
from io import BytesIO

import pytest
from werkzeug.datastructures import FileStorage

from legacy_claims.models import LegacyClient
from legacy_claims.services.legacy_import import (
    extract_registration_date,
    import_legacy_file,
    import_legacy_text,
    saved_upload,
    split_lines,
)

HEADER = "Box_ID,Nombre,Email,Fecha"

FIVE_CLIENTS = "\n".join([
    HEADER,
    "s1,Juan Perez,Juan@Mail.com,2021-05-03 00:00:00",
    "S2,Maria Lopez,maria@mail.com,2020-01-15",
    "S3,Pedro Ruiz,pedro@mail.com,",
    "S4,Ana Torres,ana@mail.com,2018-11-30",
    "S5,Luis Gomez,luis@mail.com,2017-02-01",
])


def _record(box_id):
    return LegacyClient.query.filter_by(box_id=box_id).one()


def _wide_row(box_id, name, email, tail_date):
    cells = [""] * 16
    cells[0] = "1001"
    cells[3] = name
    cells[7] = email
    cells[14] = box_id
    cells[15] = tail_date
    return "\t".join(cells)


def test_split_lines_drops_blank_lines_and_carriage_returns() -> None:
    assert split_lines("a\r\n\r\n  \nb\n") == ["a", "b"]


def test_import_is_idempotent(app, settings) -> None:
    first = import_legacy_text(FIVE_CLIENTS, settings)
    assert (first.imported, first.duplicates, first.errors) == (5, 0, 0)
    assert first.total == 6  # header counts as a line

    second = import_legacy_text(FIVE_CLIENTS, settings)
    assert (second.imported, second.duplicates, second.errors) == (0, 5, 0)
    assert LegacyClient.query.count() == 5


def test_row_without_box_id_is_an_error_and_others_still_import(app, settings) -> None:
    text = FIVE_CLIENTS + "\n,Sin Casillero,nadie@mail.com,2020-01-01"
    result = import_legacy_text(text, settings)
    assert result.imported == 5
    assert result.errors == 1
    assert result.sample_errors == []


def test_values_are_normalized(app, settings) -> None:
    import_legacy_text(FIVE_CLIENTS, settings)
    record = _record("S1")
    assert record.full_name == "Juan Perez"
    assert record.email == "juan@mail.com"
    assert record.registration_date == date(2021, 5, 3)
    assert record.is_claimed is False
    assert record.claimed_by_user_id is None


def test_missing_date_is_not_an_error(app, settings) -> None:
    result = import_legacy_text(FIVE_CLIENTS, settings)
    assert result.errors == 0
    assert _record("S3").registration_date is None


def test_null_sentinels_become_absent_values(app, settings) -> None:
    text = "\n".join([HEADER, "S9,\\N,\\N,\\N", "\\N,Alguien,a@mail.com,2020-01-01", "N,Otro,o@mail.com,"])
    result = import_legacy_text(text, settings)
    assert result.imported == 1
    assert result.errors == 2
    record = _record("S9")
    assert record.full_name is None
    assert record.email is None
    assert record.registration_date is None


def test_same_box_twice_in_one_file_keeps_the_first(app, settings) -> None:
    text = "\n".join([HEADER, "S7,Primero,uno@mail.com,", "s7,Segundo,dos@mail.com,"])
    result = import_legacy_text(text, settings)
    assert (result.imported, result.duplicates) == (1, 1)
    assert _record("S7").full_name == "Primero"


def test_reimport_never_overwrites_existing_data(app, settings, add_legacy) -> None:
    add_legacy("S1", full_name="Nombre Original", email="original@mail.com")
    result = import_legacy_text(FIVE_CLIENTS, settings)
    assert result.duplicates == 1
    assert _record("S1").full_name == "Nombre Original"


def test_wide_legacy_export_without_header(app, settings) -> None:
    text = "\n".join([
        _wide_row("S101", "Carlos Mendez", "CARLOS@mail.com", "2019-07-01 12:00:00"),
        _wide_row("S102", "Rosa Diaz", "rosa@mail.com", "\\N"),
    ])
    result = import_legacy_text(text, settings)
    assert (result.imported, result.errors, result.total) == (2, 0, 2)

    carlos = _record("S101")
    assert carlos.full_name == "Carlos Mendez"
    assert carlos.email == "carlos@mail.com"
    assert carlos.registration_date == date(2019, 7, 1)
    assert _record("S102").registration_date is None


def test_bad_lines_are_sampled_up_to_ten(app, settings) -> None:
    bad = [f"B{i},Cliente {i},c{i}@mail.com,2021-13-45" for i in range(12)]
    text = "\n".join([HEADER, "S1,Bueno,bueno@mail.com,2021-01-01", *bad])
    result = import_legacy_text(text, settings)
    assert result.imported == 1
    assert result.errors == 12
    assert len(result.sample_errors) == 10
    assert result.sample_errors[0] == "Línea con error: B0,Cliente 0,c0@mail.com,2021-13-45..."
    # a failed line leaves the session usable for the next one
    assert LegacyClient.query.count() == 1


def test_date_scan_falls_back_to_any_column() -> None:
    fields = ["S1", "Juan", "juan@mail.com", "sin fecha", "2016-08-09T10:00:00", "x"]
    assert extract_registration_date(fields, 3) == date(2016, 8, 9)
    assert extract_registration_date(["S1", "Juan", "none"], -1) is None


def test_date_column_wins_over_other_dates() -> None:
    fields = ["S1", "2001-01-01", "x", "2021-05-03 00:00:00"]
    assert extract_registration_date(fields, 3) == date(2021, 5, 3)
    assert extract_registration_date(fields, 1) == date(2001, 1, 1)


def test_empty_input(app, settings) -> None:
    result = import_legacy_text("\n\n", settings)
    assert (result.imported, result.duplicates, result.errors, result.total) == (0, 0, 0, 0)


def test_file_with_bom_is_read_as_utf8(app, settings, tmp_path) -> None:
    path = tmp_path / "clientes.csv"
    path.write_bytes(("\ufeff" + FIVE_CLIENTS).encode("utf-8"))
    result = import_legacy_file(path, settings)
    assert result.imported == 5
    assert path.exists()  # local files are not ours to delete


def test_saved_upload_is_removed_after_use(tmp_path) -> None:
    upload = FileStorage(stream=BytesIO(FIVE_CLIENTS.encode("utf-8")), filename="../clientes.csv")
    folder = tmp_path / "uploads"
    with saved_upload(upload, folder) as path:
        assert path.exists()
        assert path.parent == folder
    assert not path.exists()


def test_saved_upload_is_removed_when_import_fails(tmp_path) -> None:
    upload = FileStorage(stream=BytesIO(b"S1,x"), filename="clientes.csv")
    folder = tmp_path / "uploads"
    with pytest.raises(RuntimeError):
        with saved_upload(upload, folder):
            raise RuntimeError("boom")
    assert list(folder.iterdir()) == []
