from legacy_claims.utils.names import NameMatchPolicy, name_tokens, names_match, normalize_text


def test_normalize_strips_accents_case_and_punctuation() -> None:
    assert normalize_text("  Ñandú PÉREZ-López! ") == "nandu perezlopez"


def test_tokens_drop_single_letters() -> None:
    assert name_tokens("Juan P. Garcia") == ["juan", "garcia"]


def test_first_name_and_accent_insensitive_surname_match() -> None:
    assert names_match("Juan Perez", "Juan Pérez García") is True


def test_different_person_does_not_match() -> None:
    assert names_match("Maria", "Juan Perez") is False


def test_first_name_alone_is_enough() -> None:
    assert names_match("juan", "Juan Pérez García") is True


def test_surname_alone_is_not_enough() -> None:
    assert names_match("Garcia", "Juan Pérez García") is False


def test_two_surnames_without_first_name_match() -> None:
    assert names_match("Perez Garcia", "Juan Pérez García") is True


def test_abbreviated_names_match_by_substring() -> None:
    assert names_match("Ma Guadalupe", "María Guadalupe López") is True


def test_blank_inputs_never_match() -> None:
    assert names_match("", "Juan Perez") is False
    assert names_match("Juan", "") is False


def test_candidate_token_counts_once() -> None:
    # "ana" is inside both stored tokens but only counts as one match
    strict = NameMatchPolicy(min_token_matches=2, min_matches_with_first_name=99)
    assert names_match("ana", "mariana ana", strict) is False
