"""Tests for boardcore.messages - validation message templates."""

from boardcore.messages import MESSAGES, format_message, register_messages


class TestMessages:

    def test_format_with_params(self):
        assert format_message("_general.OCCUPIED", where="a1") == (
            "The cell a1 is already occupied."
        )

    def test_unknown_key_renders_key(self):
        assert format_message("nothing.HERE") == "nothing.HERE"

    def test_missing_params_render_template(self):
        assert format_message("_general.OCCUPIED") == MESSAGES["_general.OCCUPIED"]

    def test_register_messages(self):
        register_messages("testgame", {"HELLO": "Hello {name}"})
        assert format_message("testgame.HELLO", name="there") == "Hello there"
