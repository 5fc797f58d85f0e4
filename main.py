#!/usr/bin/env python3

from parry_duel.core.renderer import RendererConfig
from parry_duel.renderers.terminal_renderer import TerminalRenderer
from parry_duel.game.game import Game


def main():
    config = RendererConfig(
        width=80,
        height=24,
        title="Parry Duel",
        target_fps=30
    )

    renderer = TerminalRenderer(config)

    game = Game(renderer)

    try:
        game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
    except Exception as e:
        print(f"\n\nError: {e}")
        raise
    finally:
        print("\n\nThanks for playing!")


if __name__ == "__main__":
    main()
