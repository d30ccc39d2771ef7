from chat_markup.markup.social_card import (
    CARD_FIELDS,
    FIELD_LANGUAGE,
    SocialCard,
    is_social_card,
    parse_card_fields,
)


def test_anchor_phrases_mark_social_cards():
    assert is_social_card('{"Virtual Timeline Time": "noon"}')
    assert is_social_card("{Psychological State: calm}")
    assert is_social_card("{Specific Actions}")
    assert is_social_card('{"Language": "hey"}')


def test_anchor_check_is_case_sensitive():
    assert not is_social_card('{"language": "hey"}')
    assert not is_social_card('{"Facial Expressions": "grin"}')


def test_parse_strips_quotes_and_trailing_comma():
    block = '{\n  "Language": "Hello there",\n  \'Specific Actions\': \'nods\',\n}'
    assert parse_card_fields(block) == {"Language": "Hello there", "Specific Actions": "nods"}


def test_parse_keeps_text_after_first_colon():
    assert parse_card_fields('{"Virtual Timeline Time": "09:30:15"}') == {
        "Virtual Timeline Time": "09:30:15"
    }


def test_parse_only_strips_matching_quote_pairs():
    fields = parse_card_fields('{\n"Language": "unfinished\nMood: \'odd"\n}')
    assert fields == {"Language": '"unfinished', "Mood": "'odd\""}


def test_parse_tolerates_unquoted_keys_and_values():
    assert parse_card_fields("{\nLanguage: hi there\nno colon on this line\n}") == {"Language": "hi there"}


def test_parse_later_duplicate_wins():
    assert parse_card_fields('{\n"Language": "one",\n"Language": "two"\n}') == {"Language": "two"}


def test_single_line_object_is_split_per_pair():
    block = '{"Language": "Hi, all", "Facial Expressions": "grin", "Mood": "ok"}'
    assert parse_card_fields(block) == {
        "Language": "Hi, all",
        "Facial Expressions": "grin",
        "Mood": "ok",
    }


def test_social_card_view_accessors():
    card = SocialCard(
        {
            "Language": "Hi",
            "Specific Actions": "",
            "Psychological State": "calm",
            "Mood": "sunny",
        }
    )

    assert card.language == "Hi"
    assert card.specific_actions is None
    assert card.psychological_state == "calm"
    assert card.time is None
    assert card.facial_expressions is None
    assert card.non_specific_actions is None
    assert card.extras == {"Mood": "sunny"}


def test_card_vocabulary():
    assert FIELD_LANGUAGE in CARD_FIELDS
    assert len(CARD_FIELDS) == 6


def test_single_quotes_inside_value_do_not_split_the_line():
    block = "{\n\"Language\": \"She said 'yes', 'no': pick one\",\n}"
    assert parse_card_fields(block) == {"Language": "She said 'yes', 'no': pick one"}


def test_line_with_trailing_text_is_not_split_per_pair():
    block = '{\n"Language": "a", "Mood": "b" and more\n}'
    assert parse_card_fields(block) == {"Language": '"a", "Mood": "b" and more'}
