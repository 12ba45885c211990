import random

import pytest

from giftdraw.services.draw import (
    CODE_ALPHABET,
    CODE_LENGTH,
    Assignment,
    CodeGenerationError,
    DrawFailed,
    DrawResult,
    DuplicateParticipants,
    InsufficientParticipants,
    draw,
    find_derangement,
    issue_codes,
)


class FrozenRandom(random.Random):
    """Never reorders anything, so every shuffle is the identity."""

    def shuffle(self, x):
        return None


def test_draw_is_a_derangement():
    names = ["Alice", "Bob", "Carol", "Dave"]
    result = draw(names, seed=42)
    assert [a.giver for a in result] == names
    assert sorted(a.receiver for a in result) == sorted(names)
    assert all(a.giver != a.receiver for a in result)


def test_draw_many_seeds_never_self_assigns():
    names = ["Alice", "Bob", "Carol"]
    for seed in range(200):
        result = draw(names, seed=seed)
        assert all(a.giver != a.receiver for a in result)
        assert {a.receiver for a in result} == set(names)


def test_draw_deterministic_seed():
    names = ["Alice", "Bob", "Carol", "Dave", "Eve"]
    assert draw(names, seed=123) == draw(names, seed=123)


def test_draw_codes_are_unique_and_well_formed():
    names = [f"person-{i}" for i in range(30)]
    result = draw(names, seed=7)
    codes = [a.code for a in result]
    assert len(set(codes)) == len(codes)
    for code in codes:
        assert len(code) == CODE_LENGTH
        assert set(code) <= set(CODE_ALPHABET)


def test_code_alphabet_excludes_ambiguous_characters():
    assert not set("0O1I") & set(CODE_ALPHABET)


def test_draw_without_seed_uses_system_random():
    result = draw(["Alice", "Bob", "Carol"])
    assert len(result) == 3


@pytest.mark.parametrize("names", [[], ["Alice"], ["Alice", "Bob"]])
def test_draw_fails_for_too_few_participants(names):
    with pytest.raises(InsufficientParticipants):
        draw(names)


def test_draw_rejects_duplicate_names():
    with pytest.raises(DuplicateParticipants):
        draw(["Alice", "alice", "Bob"])


def test_draw_fails_when_attempts_run_out():
    with pytest.raises(DrawFailed):
        draw(["Alice", "Bob", "Carol"], seed=1, max_attempts=0)


def test_derangement_search_gives_up_after_cap():
    with pytest.raises(DrawFailed):
        find_derangement(["Alice", "Bob", "Carol"], FrozenRandom(), max_attempts=100)


def test_issue_codes_caps_collision_retries():
    with pytest.raises(CodeGenerationError):
        issue_codes(2, random.Random(3), alphabet="A", length=1, max_attempts=5)


def test_find_is_trimmed_and_case_insensitive():
    result = draw(["Alice", "Bob", "Carol"], seed=5)
    target = result.assignments[1]
    assert result.find(f"  {target.code.lower()} ") == target
    assert result.find("") is None
    assert result.find("0000000") is None


def test_code_sheet_hides_receivers():
    result = draw(["Alice", "Bob", "Carol"], seed=11)
    assert result.code_sheet() == [(a.giver, a.code) for a in result]


def test_payload_validation_on_load():
    result = draw(["Alice", "Bob", "Carol"], seed=8)
    assert DrawResult.from_payload(result.to_payload()) == result

    with pytest.raises(ValueError):
        DrawResult.from_payload({"results": [{"giver": "Alice", "receiver": "Alice", "code": "AAAAAA"}]})
    with pytest.raises(ValueError):
        DrawResult.from_payload({"rows": []})


def test_assignment_rejects_self_pair():
    with pytest.raises(ValueError):
        Assignment(giver="Alice", receiver="Alice", code="ABCDEF")


def test_draw_result_rejects_duplicate_codes():
    with pytest.raises(ValueError):
        DrawResult(
            assignments=(
                Assignment(giver="Alice", receiver="Bob", code="ABCDEF"),
                Assignment(giver="Bob", receiver="Alice", code="abcdef"),
            )
        )
