import sys
import termios
import tty
import select
from typing import Optional

from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import (
    Color, CombatantRenderData, MessageRenderData, RenderContext
)
from ..core.input import InputEvent, Key


class TerminalRenderer(Renderer):
    """Raw-mode ANSI terminal renderer.

    The screen is drawn into a character grid with a parallel grid of colour
    codes, then flushed line by line in :meth:`present`.
    """

    def __init__(self, config: Optional[RendererConfig] = None):
        super().__init__(config)
        self._old_settings = None
        self._buffer = []

        # Terminal control codes
        self.terminal_codes = {
            "reset": "\033[0m",
            "clear_screen": "\033[2J",
            "cursor_home": "\033[H",
            "hide_cursor": "\033[?25l",
            "show_cursor": "\033[?25h",
            "text_normal": "\033[97m",      # White
            "text_dim": "\033[37m",         # Light gray
            "text_bright": "\033[1;97m",    # Bright white
            "text_success": "\033[92m",     # Green
            "text_warning": "\033[93m",     # Yellow
            "text_error": "\033[91m",       # Red
        }

        # Nearest ANSI foreground for each named colour
        self.color_codes = {
            (255, 0, 0): "\033[91m",
            (0, 255, 0): "\033[92m",
            (0, 0, 255): "\033[94m",
            (255, 255, 255): "\033[97m",
            (0, 0, 0): "\033[30m",
            (255, 255, 0): "\033[93m",
            (0, 255, 255): "\033[96m",
            (128, 128, 128): "\033[37m",
        }

        # Layout configuration
        self.arena_top = 2
        self.message_row = 12
        self.bottom_strip_height = 5

    def initialize(self) -> None:
        self._old_settings = termios.tcgetattr(sys.stdin)
        tty.setraw(sys.stdin.fileno())
        print(self.terminal_codes["hide_cursor"], end='', flush=True)
        self.clear()

    def cleanup(self) -> None:
        if self._old_settings:
            termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self._old_settings)
        print(self.terminal_codes["show_cursor"], end='', flush=True)
        print(self.terminal_codes["reset"], end='', flush=True)

    def clear(self) -> None:
        print(self.terminal_codes["clear_screen"] + self.terminal_codes["cursor_home"], end='', flush=True)

    def present(self) -> None:
        print(self.terminal_codes["cursor_home"], end='', flush=True)

        # Raw mode needs an explicit carriage return on every line
        for line in self._buffer:
            print(line + '\r\n', end='', flush=True)
        self._buffer.clear()

    def _ansi(self, color: Color) -> str:
        return self.color_codes.get((color.r, color.g, color.b), self.terminal_codes["text_normal"])

    def render_frame(self, context: RenderContext) -> None:
        self._buffer.clear()

        screen_width = self.config.width
        screen_height = self.config.height

        grid = [[' ' for _ in range(screen_width)] for _ in range(screen_height)]
        colors = [['' for _ in range(screen_width)] for _ in range(screen_height)]

        self._render_header(context, grid, colors, screen_width)

        for combatant in context.combatants:
            self._render_combatant(combatant, grid, colors, screen_width)

        if context.combat_message:
            self._render_message(context.combat_message, self.message_row, grid, colors, screen_width)

        if context.banner:
            self._draw_text(grid, context.banner, (screen_width - len(context.banner)) // 2,
                            self.message_row + 1, screen_width, self.terminal_codes["text_bright"], colors)

        if context.phase_progress is not None:
            self._render_progress_bar(context.phase_progress, grid, colors, screen_width)

        if context.outcome_message:
            self._render_message(context.outcome_message, screen_height // 2, grid, colors, screen_width)

        self._render_message_strip(context, grid, colors, screen_width, screen_height)

        for y in range(len(grid)):
            line = []
            for x in range(len(grid[y])):
                if colors[y][x]:
                    line.append(colors[y][x] + grid[y][x] + self.terminal_codes["reset"])
                else:
                    line.append(grid[y][x])
            self._buffer.append(''.join(line))

    def _render_header(self, context: RenderContext, grid: list[list[str]], colors: list[list[str]],
                       screen_width: int) -> None:
        title = f" {self.config.title} "
        for x in range(screen_width):
            grid[0][x] = '─'
            colors[0][x] = self.terminal_codes["text_dim"]
        self._draw_text(grid, title, 2, 0, screen_width, self.terminal_codes["text_bright"], colors)

        if context.state_label:
            label = f" {context.state_label} "
            self._draw_text(grid, label, screen_width - len(label) - 2, 0, screen_width,
                            self.terminal_codes["text_normal"], colors)

    def _render_combatant(self, combatant: CombatantRenderData, grid: list[list[str]],
                          colors: list[list[str]], screen_width: int) -> None:
        """Draw the art block with name and HP underneath, on its side of the arena."""
        bar_width = 12
        block_width = max(
            max((len(line) for line in combatant.art), default=0),
            len(combatant.name),
            len(combatant.hp_text),
            bar_width + 2,
        )
        if combatant.side == "left":
            x = 4
        else:
            x = max(screen_width - block_width - 4, 0)

        color = self._ansi(combatant.color)
        y = self.arena_top
        for line in combatant.art:
            self._draw_text(grid, line, x, y, screen_width - x, color, colors)
            y += 1

        self._draw_text(grid, combatant.name, x, y, screen_width - x, self.terminal_codes["text_bright"], colors)
        self._draw_text(grid, combatant.hp_text, x, y + 1, screen_width - x, "", colors)

        # HP bar coloured by remaining fraction
        filled = int(combatant.hp_percent * bar_width)
        if combatant.hp_percent > 0.6:
            bar_color = self.terminal_codes["text_success"]
        elif combatant.hp_percent > 0.3:
            bar_color = self.terminal_codes["text_warning"]
        else:
            bar_color = self.terminal_codes["text_error"]
        bar_text = "[" + "█" * filled + "░" * (bar_width - filled) + "]"
        self._draw_text(grid, bar_text, x, y + 2, screen_width - x, bar_color, colors)

    def _render_message(self, message: MessageRenderData, y: int, grid: list[list[str]],
                        colors: list[list[str]], screen_width: int) -> None:
        text = message.text
        if message.emphasis:
            text = f"*** {text} ***"
        color = self._ansi(message.color)
        if message.emphasis:
            color = "\033[1m" + color
        self._draw_text(grid, text, max((screen_width - len(text)) // 2, 0), y, screen_width, color, colors)

    def _render_progress_bar(self, progress: float, grid: list[list[str]], colors: list[list[str]],
                             screen_width: int) -> None:
        bar_width = screen_width // 2
        filled = int(min(max(progress, 0.0), 1.0) * bar_width)
        bar_text = "[" + "=" * filled + " " * (bar_width - filled) + "]"
        x = (screen_width - len(bar_text)) // 2
        self._draw_text(grid, bar_text, x, self.message_row + 2, screen_width,
                        self.terminal_codes["text_error"], colors)

    def _render_message_strip(self, context: RenderContext, grid: list[list[str]], colors: list[list[str]],
                              screen_width: int, screen_height: int) -> None:
        """Render key hints and the recent log at the bottom of the screen."""
        top = screen_height - self.bottom_strip_height
        for x in range(screen_width):
            grid[top][x] = '─'
            colors[top][x] = self.terminal_codes["text_dim"]

        title = " Message Log "
        self._draw_text(grid, title, (screen_width - len(title)) // 2, top, screen_width,
                        self.terminal_codes["text_normal"], colors)

        y = top + 1
        for line in context.log_lines[-(self.bottom_strip_height - 2):]:
            self._draw_text(grid, line, 1, y, screen_width - 2, "", colors)
            y += 1

        if context.key_hints:
            hints = "  ".join(context.key_hints)
            self._draw_text(grid, hints, 1, screen_height - 1, screen_width - 2,
                            self.terminal_codes["text_dim"], colors)

    def _draw_text(self, grid: list[list[str]], text: str, x: int, y: int, max_width: int, color: str = "",
                   colors: Optional[list[list[str]]] = None) -> None:
        """Draw text at the specified position, truncating if needed."""
        if y < 0 or y >= len(grid):
            return

        text = text[:max_width]
        for i, char in enumerate(text):
            if 0 <= x + i < len(grid[y]):
                grid[y][x + i] = char
                if color and colors:
                    colors[y][x + i] = color

    def get_input_events(self) -> list[InputEvent]:
        events = []

        while sys.stdin in select.select([sys.stdin], [], [], 0)[0]:
            key = sys.stdin.read(1)
            if not key:
                # EOF: select keeps reporting a closed stdin as readable
                break

            if key == '\x03':
                # Ctrl-C never reaches us as SIGINT in raw mode
                events.append(InputEvent.quit_event())
            elif key == '\x1b':
                if sys.stdin in select.select([sys.stdin], [], [], 0)[0]:
                    next_chars = sys.stdin.read(2)
                else:
                    next_chars = ''

                if next_chars == '[A':
                    events.append(InputEvent.key_press(Key.UP))
                elif next_chars == '[B':
                    events.append(InputEvent.key_press(Key.DOWN))
                elif next_chars == '[C':
                    events.append(InputEvent.key_press(Key.RIGHT))
                elif next_chars == '[D':
                    events.append(InputEvent.key_press(Key.LEFT))
                else:
                    events.append(InputEvent.key_press(Key.ESCAPE))
            elif key == '\r' or key == '\n':
                events.append(InputEvent.key_press(Key.ENTER))
            elif key == ' ':
                events.append(InputEvent.key_press(Key.SPACE))
            elif key == '\t':
                events.append(InputEvent.key_press(Key.TAB))
            elif key == '\x7f':
                events.append(InputEvent.key_press(Key.BACKSPACE))
            elif key in '0123456789':
                events.append(InputEvent.key_press(Key[f"NUM_{key}"]))
            elif key.lower() in 'abcdefghijklmnopqrstuvwxyz':
                events.append(InputEvent.key_press(getattr(Key, key.upper(), Key.UNKNOWN)))
            else:
                events.append(InputEvent.key_press(Key.UNKNOWN))

        return events
