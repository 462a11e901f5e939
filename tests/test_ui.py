"""Tests for the Textual TUI, driven through the app pilot."""
import asyncio
import io

import pytest
from rich.console import Console
from textual.widgets import Input, Label, Select, Switch

from helpers import openai_reply
from polychat.conversation import (
    CANCELLED_MESSAGE,
    FAILURE_MESSAGE,
    AuthenticationError,
    ConversationController,
    Message,
    Role,
)
from polychat.ui import ChatApp, ThemePreference
from polychat.ui.formatting import render_turn
from polychat.ui.widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


async def _submit(app: ChatApp, pilot, text: str) -> None:
    app.query_one("#chat-input-bar", ChatInputBar).post_message(ChatInputBar.Submitted(text))
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestThemeToggle:
    @pytest.mark.asyncio
    async def test_starts_dark(self, controller):
        app = ChatApp(controller)
        async with app.run_test():
            assert app.theme == "polychat-dark"
            assert app.query_one("#theme-switch", Switch).value is True
            assert str(app.query_one("#theme-label", Label).render()) == "Dark"

    @pytest.mark.asyncio
    async def test_switch_flips_to_light(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            app.query_one("#theme-switch", Switch).toggle()
            await pilot.pause()

            assert app.theme == "polychat-light"
            assert app.theme_preference.is_dark is False
            assert str(app.query_one("#theme-label", Label).render()) == "Light"

    @pytest.mark.asyncio
    async def test_toggle_action_round_trips(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            app.action_toggle_theme()
            await pilot.pause()
            app.action_toggle_theme()
            await pilot.pause()

            assert app.theme == "polychat-dark"

    @pytest.mark.asyncio
    async def test_light_preference_on_start(self, controller):
        app = ChatApp(controller, theme_preference=ThemePreference(mode="light"))
        async with app.run_test():
            assert app.theme == "polychat-light"
            assert app.query_one("#theme-switch", Switch).value is False


class TestSettingsBar:
    @pytest.mark.asyncio
    async def test_select_switches_provider(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            assert app.query_one("#provider-select", Select).value == "openai"

            app.query_one("#provider-select", Select).value = "deepseek"
            await pilot.pause()

            assert controller.active_provider.id == "deepseek"
            assert "DeepSeek" in app.sub_title

    @pytest.mark.asyncio
    async def test_api_key_input_sets_credential(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            key_input = app.query_one("#api-key", Input)
            assert key_input.password is True

            key_input.value = "sk-new"
            await pilot.pause()

            assert controller.session.credential == "sk-new"


class TestChatting:
    @pytest.mark.asyncio
    async def test_submit_renders_both_turns(self, controller, mock_transport):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await _submit(app, pilot, "ping")

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.message_count == 2
            assert chat.get_last_response() == "pong"
            assert controller.pending is False
            mock_transport.post_json.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_typing_and_enter_sends(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await pilot.press("h", "i", "enter")
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert [m.content for m in controller.history] == ["hi", "pong"]
            assert app.query_one("#chat-input-bar", ChatInputBar).text == ""

    @pytest.mark.asyncio
    async def test_missing_credential_keeps_history_empty(self, registry, mock_transport):
        controller = ConversationController(registry, mock_transport, credential="")
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await _submit(app, pilot, "ping")

            assert controller.history == ()
            assert app.query_one("#chat-history", ChatHistoryWidget).message_count == 0
            mock_transport.post_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_renders_failure_turn(self, controller, mock_transport):
        mock_transport.post_json.side_effect = AuthenticationError(401)
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await _submit(app, pilot, "ping")

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.get_last_response() == FAILURE_MESSAGE
            assert len(chat.query(".failed-message")) == 1

    @pytest.mark.asyncio
    async def test_cancel_appends_cancelled_turn(self, controller, mock_transport):
        release = asyncio.Event()

        async def _hang(*args, **kwargs):
            await release.wait()

        mock_transport.post_json.side_effect = _hang
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            app.query_one("#chat-input-bar", ChatInputBar).post_message(ChatInputBar.Submitted("ping"))
            await pilot.pause()
            assert controller.pending is True
            assert app.query_one("#chat-history", ChatHistoryWidget).has_class("sending")

            app.action_cancel_request()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert controller.pending is False
            assert controller.history[-1].content == CANCELLED_MESSAGE
            assert not app.query_one("#chat-history", ChatHistoryWidget).has_class("sending")
            assert len(app.query_one("#chat-history", ChatHistoryWidget).query(".failed-message")) == 1

    @pytest.mark.asyncio
    async def test_clear_chat(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await _submit(app, pilot, "ping")
            app.action_clear_chat()
            await pilot.pause()

            assert controller.history == ()
            assert app.query_one("#chat-history", ChatHistoryWidget).message_count == 0


class TestInputAffordances:
    """Prompt editing and the Send button while idle and while sending."""

    @pytest.mark.asyncio
    async def test_send_button_and_prompt_follow_input_and_busy(self, controller, mock_transport):
        release = asyncio.Event()

        async def _gated(*args, **kwargs):
            await release.wait()
            return openai_reply("pong")

        mock_transport.post_json.side_effect = _gated
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            send_btn = app.query_one("#send-btn")
            prompt = app.query_one("#chat-input")
            assert send_btn.disabled is True

            await pilot.press("h", "i")
            assert send_btn.disabled is False

            await pilot.press("enter")
            await pilot.pause()
            assert controller.pending is True
            assert prompt.disabled is True
            assert send_btn.disabled is True

            release.set()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert controller.pending is False
            assert prompt.disabled is False
            assert send_btn.disabled is True
            assert app.focused is prompt

    @pytest.mark.asyncio
    async def test_whitespace_only_input_keeps_send_disabled(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await pilot.press("space", "space")
            assert app.query_one("#send-btn").disabled is True

    @pytest.mark.asyncio
    async def test_ctrl_j_inserts_newline_and_sends_verbatim(self, controller, mock_transport):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await pilot.press("h", "i", "ctrl+j", "x")
            assert app.query_one("#chat-input-bar", ChatInputBar).text == "hi\nx"

            await pilot.press("enter")
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert [m.content for m in controller.history] == ["hi\nx", "pong"]
            sent = mock_transport.post_json.await_args.args[1]
            assert sent["messages"][0]["content"] == "hi\nx"

    @pytest.mark.asyncio
    async def test_provider_switch_keeps_focus(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            key_input = app.query_one("#api-key", Input)
            key_input.focus()
            await pilot.pause()

            app.query_one("#provider-select", Select).value = "deepseek"
            await pilot.pause()

            assert controller.active_provider.id == "deepseek"
            assert app.focused is key_input


class TestTranscript:
    @pytest.mark.asyncio
    async def test_stylesheet_loads_and_user_turns_are_indented(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await _submit(app, pilot, "ping")

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.query_one(".user-message").styles.margin.left == 8
            assert chat.query_one(".assistant-message").styles.margin.right == 8

    @pytest.mark.asyncio
    async def test_reply_matching_failure_text_is_not_styled_failed(self, controller, mock_transport):
        mock_transport.post_json.return_value = openai_reply(FAILURE_MESSAGE)
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await _submit(app, pilot, "ping")

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.get_last_response() == FAILURE_MESSAGE
            assert len(chat.query(".failed-message")) == 0
            assert len(chat.query(".assistant-message")) == 1

    @pytest.mark.asyncio
    async def test_earlier_failure_stays_styled_after_success(self, controller, mock_transport):
        mock_transport.post_json.side_effect = [AuthenticationError(401), openai_reply("pong")]
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await _submit(app, pilot, "one")
            await _submit(app, pilot, "two")

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.message_count == 4
            assert len(chat.query(".failed-message")) == 1
            assert len(chat.query(".assistant-message")) == 1

    @pytest.mark.asyncio
    async def test_click_copies_turn(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            await _submit(app, pilot, "ping")

            await pilot.click("#chat-history .user-message")
            await pilot.pause()

            assert app.clipboard == "ping"


class TestLogPanel:
    @pytest.mark.asyncio
    async def test_hidden_by_default(self, controller):
        app = ChatApp(controller)
        async with app.run_test():
            assert app.query_one("#debug-panel", DebugPanel).display is False

    @pytest.mark.asyncio
    async def test_log_level_shows_panel(self, controller):
        app = ChatApp(controller, log_level="info")
        async with app.run_test():
            panel = app.query_one("#debug-panel", DebugPanel)
            assert panel.display is True
            assert panel.border_subtitle == "Level: INFO"

    @pytest.mark.asyncio
    async def test_toggle_debug(self, controller):
        app = ChatApp(controller)
        async with app.run_test() as pilot:
            app.action_toggle_debug()
            await pilot.pause()
            assert app.query_one("#debug-panel", DebugPanel).display is True


class TestThemePreference:
    def test_defaults_to_dark(self):
        preference = ThemePreference()
        assert preference.is_dark
        assert preference.theme_name == "polychat-dark"
        assert preference.label == "Dark"

    def test_toggle_flips_mode(self):
        preference = ThemePreference()
        assert preference.toggle() == "light"
        assert preference.theme_name == "polychat-light"
        assert preference.toggle() == "dark"


class TestFormatting:
    def test_render_turn_titles(self):
        user = render_turn(Message(role=Role.USER, content="**hi**"))
        reply = render_turn(Message(role=Role.ASSISTANT, content="pong"), title="DeepSeek")

        assert user.title == "You"
        assert reply.title == "DeepSeek"

    def test_render_turn_keeps_markdown_source(self):
        console = Console(width=60, file=io.StringIO())
        console.print(render_turn(Message(role=Role.ASSISTANT, content="- one\n- two")))
        output = console.file.getvalue()

        assert "one" in output and "two" in output
        assert "- one" not in output
