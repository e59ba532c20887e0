from tripsettle.display import display_name, settlement_lines
from tripsettle.models import Transfer


def test_viewer_is_you():
    assert display_name("u-123", "u-123") == "You"


def test_self_marker_is_you():
    assert display_name("ME", "u-123", self_marker="ME") == "You"
    assert display_name("ME", "u-123") == "ME"


def test_you_label_is_localized():
    assert display_name("u-123", "u-123", locale="zh-TW") == "你 (You)"
    assert display_name("u-123", "u-123", locale="ja-JP") == "あなた (You)"
    assert display_name("u-123", "u-123", locale="fr-FR") == "You"


def test_known_name_wins_over_id():
    assert display_name("u-456", "u-123", {"u-456": "Mei"}) == "Mei"


def test_unknown_ids_are_shortened():
    assert display_name("8f3ac2d1", "u-123") == "8f3a..."
    assert display_name("Bob", "u-123") == "Bob"
    assert display_name("abcd", None) == "abcd"


def test_missing_id():
    assert display_name("", "u-123") == "Unknown"
    assert display_name(None, "u-123") == "Unknown"


def test_settlement_lines():
    transfers = [Transfer("u-456", "u-123", 100), Transfer("8f3ac2d1", "u-123", 33.33)]

    lines = settlement_lines(transfers, viewer_id="u-123", known_names={"u-456": "Mei"})

    assert lines == ["Mei owes You $100", "8f3a... owes You $33.33"]


def test_settlement_lines_without_debts():
    assert settlement_lines([]) == ["No debts found!"]


def test_settlement_lines_follow_precision():
    transfers = [Transfer("B", "A", 33.333), Transfer("C", "A", 100)]

    assert settlement_lines(transfers, precision=3) == ["B owes A $33.333", "C owes A $100.000"]
    assert settlement_lines(transfers, precision=0) == ["B owes A $33", "C owes A $100"]
