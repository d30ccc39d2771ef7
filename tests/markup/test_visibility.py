from chat_markup.core.messages import ChatMessage
from chat_markup.markup.visibility import (
    filter_history_for_viewer,
    mask_psychological_state,
    strip_logic_thoughts,
)

ALLIANCES = {"wolf_a": "wolf", "wolf_b": "wolf", "villager": None}


def test_strip_logic_thoughts_removes_every_pair():
    text = "[[THOUGHT]]plan\nA[[/THOUGHT]]Hi[[THOUGHT]]B[[/THOUGHT]][[RESULT]]R[[/RESULT]]"
    assert strip_logic_thoughts(text) == "Hi[[RESULT]]R[[/RESULT]]"


def test_mask_psychological_state_keeps_key_and_quotes():
    text = '{"Language": "hello", "Psychological State": "plotting \\"quietly\\""}'
    assert mask_psychological_state(text) == (
        '{"Language": "hello", "Psychological State": "[Hidden Logic/Thought]"}'
    )


def test_mask_uses_custom_label():
    assert mask_psychological_state('"Psychological State" : "x"', "???") == '"Psychological State" : "???"'


def test_user_and_own_messages_are_untouched():
    history = [
        ChatMessage(id="1", sender_id="user", content="[[THOUGHT]]x[[/THOUGHT]]"),
        ChatMessage(id="2", sender_id="wolf_a", content='[[THOUGHT]]mine[[/THOUGHT]] {"Psychological State": "s"}'),
    ]
    assert filter_history_for_viewer(history, "wolf_a") == history


def test_others_lose_thoughts_and_non_allies_lose_state():
    message = ChatMessage(
        id="3",
        sender_id="wolf_b",
        content='[[THOUGHT]]secret plan[[/THOUGHT]]\n{"Language": "hi", "Psychological State": "hungry"}',
    )

    ally_view = filter_history_for_viewer([message], "wolf_a", alliance_of=ALLIANCES.get)
    villager_view = filter_history_for_viewer([message], "villager", alliance_of=ALLIANCES.get)

    assert ally_view[0].content == '{"Language": "hi", "Psychological State": "hungry"}'
    assert villager_view[0].content == '{"Language": "hi", "Psychological State": "[Hidden Logic/Thought]"}'
    assert villager_view[0].id == "3"


def test_missing_alliances_are_never_allied():
    message = ChatMessage(id="4", sender_id="villager", content='"Psychological State": "calm"')
    view = filter_history_for_viewer([message], "other", alliance_of=lambda _pid: None)
    assert view[0].content == '"Psychological State": "[Hidden Logic/Thought]"'


def test_messages_left_blank_are_dropped():
    history = [
        ChatMessage(id="5", sender_id="gpt", content="  [[THOUGHT]]only thinking[[/THOUGHT]]  "),
        ChatMessage(id="6", sender_id="gpt", content="visible"),
    ]
    assert [m.id for m in filter_history_for_viewer(history, "claude")] == ["6"]
