import asyncio

from giftdraw.bot.handlers import codes
from giftdraw.bot.keyboards import (
    CopyCode,
    RemoveParticipant,
    codes_keyboard,
    resolve_participant,
    setup_keyboard,
)
from giftdraw.services.draw import draw
from giftdraw.services.reveal import RevealController
from giftdraw.services.roster import Roster
from giftdraw.services.sharing import CopiedIndicator


def _buttons(markup):
    return [button for row in markup.inline_keyboard for button in row]


def _button_for(markup, label):
    return next(button for button in _buttons(markup) if button.text.endswith(label))


def test_old_remove_button_still_targets_its_name():
    roster = Roster(["Alice", "Bob", "Carol"])
    old_markup = setup_keyboard(roster.participants, can_draw=True)
    carol_button = _button_for(old_markup, "Carol")

    roster.add("Dave")
    roster.remove("Alice")

    data = RemoveParticipant.unpack(carol_button.callback_data)
    name = resolve_participant(roster.names(), data.key)
    assert name == "Carol"
    roster.remove(name)
    assert roster.names() == ["Bob", "Dave"]


def test_remove_button_for_departed_name_resolves_to_nothing():
    roster = Roster(["Alice", "Bob", "Carol"])
    alice_button = _button_for(setup_keyboard(roster.participants, can_draw=True), "Alice")
    roster.remove("Alice")

    data = RemoveParticipant.unpack(alice_button.callback_data)
    assert resolve_participant(roster.names(), data.key) is None


def test_copy_button_follows_the_giver_not_the_position():
    old_sheet = draw(["Alice", "Bob", "Carol"], seed=1).code_sheet()
    bob_button = _button_for(codes_keyboard(old_sheet, marked=set()), "Bob")

    new_sheet = dict(draw(["Zoe", "Bob", "Yan", "Xia"], seed=2).code_sheet())
    data = CopyCode.unpack(bob_button.callback_data)
    assert resolve_participant(new_sheet, data.key) == "Bob"


def test_callback_data_fits_telegram_limit():
    long_name = "Maximiliana Theodora von Hohenzollern-Sigmaringen " * 3
    markup = setup_keyboard(Roster([long_name, "B", "C"]).participants, can_draw=True)
    assert all(len(button.callback_data.encode()) <= 64 for button in _buttons(markup))


def test_refresh_tasks_are_kept_until_done(store):
    controller = RevealController.start(store)
    indicator = CopiedIndicator(0)

    async def scenario():
        task = codes._schedule_refresh(None, controller, indicator)
        assert task in codes._refresh_tasks
        await task
        await asyncio.sleep(0)
        return task

    task = asyncio.run(scenario())
    assert task not in codes._refresh_tasks
