from giftdraw.services.roster import Participant, Roster


def test_add_is_case_insensitive_unique():
    roster = Roster()
    assert roster.add("Alice")
    assert not roster.add("alice")
    assert roster.names() == ["Alice"]


def test_add_trims_and_rejects_empty():
    roster = Roster()
    assert roster.add("  Bob  ")
    assert not roster.add("   ")
    assert not roster.add("")
    assert not roster.add(" bob")
    assert roster.participants == [Participant(name="Bob")]


def test_insertion_order_is_kept():
    roster = Roster(["Carol", "Alice", "Bob"])
    assert roster.names() == ["Carol", "Alice", "Bob"]
    assert len(roster) == 3


def test_remove_needs_exact_name():
    roster = Roster(["Alice", "Bob"])
    assert not roster.remove("alice")
    assert not roster.remove("Zed")
    assert roster.remove("Alice")
    assert roster.names() == ["Bob"]


def test_contains_and_clear():
    roster = Roster(["Alice"])
    assert "ALICE" in roster
    assert 42 not in roster
    roster.clear()
    assert len(roster) == 0
