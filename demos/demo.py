#!/usr/bin/env python3

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from parry_duel.core.encounter_config import EncounterConfig
from parry_duel.core.renderer import RendererConfig
from parry_duel.renderers.simple_renderer import SimpleRenderer
from parry_duel.game.game import Game


def main():
    print("Parry Duel - Demo Mode")
    print("The simple renderer plays the encounter on its own:")
    print("it attacks every turn and parries every other enemy attack.")
    print("")

    config = RendererConfig(
        width=40,
        height=23,
        title="Parry Duel Demo",
        target_fps=10
    )

    renderer = SimpleRenderer(config)

    # Fixed seed so every demo run sees the same telegraph durations
    game = Game(renderer, config=EncounterConfig(seed=7))

    try:
        game.run()
    except Exception as e:
        print(f"\nError: {e}")
        raise

    print("\nDemo complete!")
    print("\nTo play interactively run 'python main.py'")


if __name__ == "__main__":
    main()
