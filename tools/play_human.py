"""
Human Play Mode
================

Play Organ Lab interactively with the keyboard.

Controls:
    - A / B / C: Select cavity (manual placement mode)
    - 1-9: Place organ (1-3 heart, 4-6 lungs, 7-9 brain)
    - Backspace: Empty the selected cavity
    - Space: Commit (pull the lever)
    - R: Restart round
    - ESC: Quit

Usage:
    python -m tools.play_human [--auto] [--config PATH] [--width W] [--height H]
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Dict, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from organ_lab.placement_core.config_loader import load_config, GameConfig
from organ_lab.placement_core.render_pygame import PygameRenderer
from organ_lab.placement_core.round_controller import RoundController


class HumanPlayer:
    """
    Keyboard front end for a RoundController.

    Translates key presses into controller calls and drives the reset
    timer from the frame clock.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        window_width: int = 720,
        window_height: int = 480,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._window_width = window_width
        self._window_height = window_height
        self._target_fps = target_fps

        self._round = RoundController(config=config)
        self._round.signals.succeeded.connect(lambda: print("Round succeeded!"))
        self._round.signals.failed.connect(lambda: print("Round failed."))
        self._round.signals.cleared.connect(lambda: print("\n=== Round reset ===\n"))

        pygame.init()
        self._clock = pygame.time.Clock()
        self._renderer = PygameRenderer(config)

        self._item_keys: Dict[int, int] = {
            getattr(pygame, f"K_{i}"): i for i in range(1, 10)
        }
        self._cavity_keys: Dict[int, str] = {}
        for cavity in config.cavities:
            if cavity.select_key:
                self._cavity_keys[pygame.key.key_code(cavity.select_key)] = cavity.id

        self._running = True
        self._rounds_won = 0
        self._round.signals.succeeded.connect(self._count_win)

    def _count_win(self) -> None:
        self._rounds_won += 1

    def run(self) -> int:
        """Run the game loop. Returns the number of rounds won."""
        print("=== Organ Lab ===")
        if self._round.manual_placement:
            print("Use A/B/C to select a cavity and 1-9 to place organs. Space = pull lever.")
        else:
            print("Press 1-9 to place organs into their cavities. Space = pull lever.")
        print("R to restart, ESC to quit")
        print()

        while self._running:
            dt = self._clock.tick(self._target_fps) / 1000.0
            self._handle_events()
            self._round.tick(dt)
            self._render()

        self._round.close()
        self._renderer.close()
        pygame.quit()
        return self._rounds_won

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._round.reset()
                elif event.key == pygame.K_SPACE:
                    self._round.commit()
                elif event.key == pygame.K_BACKSPACE:
                    selected = self._round.selected_cavity
                    if selected is not None:
                        self._round.clear_cavity(selected.id)
                elif event.key in self._cavity_keys:
                    self._round.select_cavity(self._cavity_keys[event.key])
                elif event.key in self._item_keys:
                    self._round.place_item(self._item_keys[event.key])

    def _render(self) -> None:
        self._renderer.render_to_screen(
            self._round.get_render_data(),
            self._window_width,
            self._window_height
        )
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Organ Lab interactively")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--auto", action="store_true", help="Auto-place organs by category")
    parser.add_argument("--width", type=int, default=720, help="Window width (default: 720)")
    parser.add_argument("--height", type=int, default=480, help="Window height (default: 480)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        if args.auto:
            config = dataclasses.replace(
                config,
                round=dataclasses.replace(config.round, manual_placement=False)
            )

        logging.basicConfig(
            level=logging.DEBUG if config.debug.print_debug else logging.INFO,
            format="[%(levelname)s] %(message)s"
        )

        player = HumanPlayer(
            config=config,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps
        )
        wins = player.run()
        print(f"\nRounds won: {wins}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
