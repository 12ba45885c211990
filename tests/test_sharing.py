from giftdraw.services.sharing import CopiedIndicator, format_code_list, format_printable_sheet

SHEET = [("Alice", "ABC234"), ("Bob", "XYZ987"), ("Carol", "KLM456")]


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_code_list_is_one_line_per_giver_in_order():
    assert format_code_list(SHEET) == "Alice: ABC234\nBob: XYZ987\nCarol: KLM456"


def test_printable_sheet_lists_every_code():
    sheet = format_printable_sheet(SHEET, title="Office party")
    assert sheet.startswith("Office party\n============\n")
    for giver, code in SHEET:
        line = next(line for line in sheet.splitlines() if line.startswith(giver))
        assert line.endswith(code)


def test_copied_mark_expires():
    clock = FakeClock()
    indicator = CopiedIndicator(2, clock=clock)
    indicator.mark("ABC234")
    assert indicator.is_marked("ABC234")
    assert indicator.marked(code for _, code in SHEET) == {"ABC234"}

    clock.now += 2
    assert not indicator.is_marked("ABC234")


def test_copied_mark_can_be_cleared():
    indicator = CopiedIndicator(60)
    indicator.mark("ABC234")
    indicator.mark("XYZ987")
    indicator.clear("ABC234")
    assert not indicator.is_marked("ABC234")
    indicator.clear()
    assert not indicator.is_marked("XYZ987")
