"""
Tests for the terminal and simple renderers.

Frames are rendered into the renderer's buffer without touching a real
terminal; keyboard input is fed through a fake stdin.
"""

import io
import re
import sys

import pytest

from parry_duel.core.input import InputType, Key
from parry_duel.core.renderable import (
    Color,
    CombatantRenderData,
    MessageRenderData,
    RenderContext,
)
from parry_duel.renderers import terminal_renderer
from parry_duel.renderers.simple_renderer import SimpleRenderer
from parry_duel.renderers.terminal_renderer import TerminalRenderer

ANSI = re.compile(r"\033\[[0-9;?]*[A-Za-z]")


def plain(lines: list[str]) -> str:
    return "\n".join(ANSI.sub("", line) for line in lines)


def sample_context(**overrides) -> RenderContext:
    context = RenderContext(
        combatants=[
            CombatantRenderData(name="Hero", art=["(o)"], hp_current=3, hp_max=3, side="left"),
            CombatantRenderData(name="Ghost", art=["~o~"], hp_current=4, hp_max=5, side="right",
                                color=Color.from_name("red")),
        ],
        state_name="ENEMY_ATTACK",
        state_label="Enemy attacks!",
        combat_message=MessageRenderData(text="PARRY NOW!"),
        phase_progress=0.5,
        key_hints=["A: attack", "SPACE: parry"],
        log_lines=["[BTL] Player attacks! Enemy health is now 4"],
    )
    for key, value in overrides.items():
        setattr(context, key, value)
    return context


class FakeStdin(io.StringIO):
    def has_data(self) -> bool:
        return self.tell() < len(self.getvalue())


@pytest.fixture
def fake_stdin(monkeypatch):
    def install(data: str, closed: bool = False) -> FakeStdin:
        """A closed stdin stays readable after its data runs out, like a real EOF."""
        stdin = FakeStdin(data)
        monkeypatch.setattr(sys, "stdin", stdin)
        monkeypatch.setattr(
            terminal_renderer.select,
            "select",
            lambda rlist, wlist, xlist, timeout: ([stdin] if closed or stdin.has_data() else [], [], []),
        )
        return stdin
    return install


class TestTerminalRenderer:
    """Test TerminalRenderer frame layout and key decoding."""

    def test_frame_has_screen_height(self):
        renderer = TerminalRenderer()

        renderer.render_frame(sample_context())

        assert len(renderer._buffer) == renderer.config.height

    def test_frame_content(self):
        renderer = TerminalRenderer()

        renderer.render_frame(sample_context())
        text = plain(renderer._buffer)

        assert "HP: 3 / 3" in text
        assert "HP: 4 / 5" in text
        assert "PARRY NOW!" in text
        assert "Enemy attacks!" in text
        assert "A: attack  SPACE: parry" in text
        assert "Player attacks! Enemy health is now 4" in text

    def test_game_over_frame(self):
        renderer = TerminalRenderer()
        context = sample_context(
            combatants=[],
            combat_message=None,
            phase_progress=None,
            key_hints=[],
            outcome_message=MessageRenderData(text="YOU LOSE", emphasis=True),
        )

        renderer.render_frame(context)
        text = plain(renderer._buffer)

        assert "*** YOU LOSE ***" in text
        assert "HP:" not in text

    def test_decodes_keys(self, fake_stdin):
        fake_stdin("a \x1b[Aq7\r")
        renderer = TerminalRenderer()

        events = renderer.get_input_events()

        assert [event.key for event in events] == [Key.A, Key.SPACE, Key.UP, Key.Q, Key.NUM_7, Key.ENTER]
        assert all(event.event_type == InputType.KEY_PRESS for event in events)

    def test_lone_escape(self, fake_stdin):
        fake_stdin("\x1b")

        events = TerminalRenderer().get_input_events()

        assert [event.key for event in events] == [Key.ESCAPE]

    def test_ctrl_c_quits(self, fake_stdin):
        fake_stdin("\x03")

        events = TerminalRenderer().get_input_events()

        assert events[0].event_type == InputType.QUIT

    def test_no_input(self, fake_stdin):
        fake_stdin("")

        assert TerminalRenderer().get_input_events() == []

    def test_stops_reading_at_eof(self, fake_stdin):
        fake_stdin("a", closed=True)

        events = TerminalRenderer().get_input_events()

        assert [event.key for event in events] == [Key.A]

    def test_non_ascii_characters_are_unknown(self, fake_stdin):
        fake_stdin("\u00b2\u0663\u00e9")

        events = TerminalRenderer().get_input_events()

        assert [event.key for event in events] == [Key.UNKNOWN, Key.UNKNOWN, Key.UNKNOWN]


class TestSimpleRenderer:
    """Test the scripted demo player."""

    def test_no_input_before_first_frame(self):
        assert SimpleRenderer().get_input_events() == []

    def test_interactive_mode_sends_nothing(self):
        renderer = SimpleRenderer(demo_mode=False)
        renderer.render_frame(sample_context(state_name="PLAYER_TURN"))

        assert renderer.get_input_events() == []

    def test_interactive_mode_prints_only_changed_frames(self, capsys):
        renderer = SimpleRenderer(demo_mode=False)

        for _ in range(3):
            renderer.render_frame(sample_context(state_name="PLAYER_TURN"))
        renderer.render_frame(sample_context(state_name="ENEMY_TELEGRAPH"))

        assert capsys.readouterr().out.count("--- Frame") == 2

    def test_attacks_on_player_turn(self, capsys):
        renderer = SimpleRenderer()
        renderer.render_frame(sample_context(state_name="PLAYER_TURN", combat_message=None))

        events = renderer.get_input_events()

        assert [event.key for event in events] == [Key.A]

    def test_parries_every_other_attack(self, capsys):
        renderer = SimpleRenderer()
        pressed = []

        for _ in range(2):
            renderer.render_frame(sample_context(state_name="ENEMY_TELEGRAPH"))
            renderer.get_input_events()
            for _ in range(3):
                renderer.render_frame(sample_context(state_name="ENEMY_ATTACK"))
                pressed.append([event.key for event in renderer.get_input_events()])

        assert pressed == [[Key.SPACE], [], [], [], [], []]

    def test_any_key_after_outcome(self, capsys):
        renderer = SimpleRenderer()
        renderer.render_frame(sample_context(
            state_name="GAME_OVER", outcome_message=MessageRenderData(text="YOU WIN")
        ))

        events = renderer.get_input_events()

        assert len(events) == 1
        assert "YOU WIN" in capsys.readouterr().out
