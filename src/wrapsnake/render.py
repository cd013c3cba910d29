# render.py
from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import (
    BG, PANEL, GREEN, HEAD as HEAD_COLOR, RED, TEXT, BUTTON,
    HUD_HEIGHT, PAD_HEIGHT, CFG,
)
from .game import BODY, FOOD, HEAD, Direction, GameState

BUTTON_SIZE = 40
BUTTON_GAP = 6


def window_size(board_px: int) -> Tuple[int, int]:
    """Pixel size of the whole window: HUD on top, board, direction pad below."""
    return board_px, HUD_HEIGHT + board_px + PAD_HEIGHT


class Renderer:
    """Draws a GameState onto a pygame surface and hit-tests the on-screen controls."""

    def __init__(self, screen: pygame.Surface, font: pygame.font.Font,
                 board_px: int = CFG.window_size, cell_size: int = CFG.cell_size):
        self.screen = screen
        self.font = font
        self.board_px = board_px
        self.cell_size = cell_size
        self.board_rect = pygame.Rect(0, HUD_HEIGHT, board_px, board_px)
        self.buttons = self._layout_buttons()
        self.restart_rect = pygame.Rect(0, 0, 140, 36)
        self.restart_rect.center = (board_px // 2, HUD_HEIGHT + board_px // 2 + 40)

    def _layout_buttons(self) -> Dict[Direction, pygame.Rect]:
        cx = self.board_px // 2
        top = HUD_HEIGHT + self.board_px + BUTTON_GAP
        step = BUTTON_SIZE + BUTTON_GAP
        half = BUTTON_SIZE // 2
        return {
            Direction.UP: pygame.Rect(cx - half, top, BUTTON_SIZE, BUTTON_SIZE),
            Direction.LEFT: pygame.Rect(cx - half - step, top + step, BUTTON_SIZE, BUTTON_SIZE),
            Direction.RIGHT: pygame.Rect(cx - half + step, top + step, BUTTON_SIZE, BUTTON_SIZE),
            Direction.DOWN: pygame.Rect(cx - half, top + 2 * step, BUTTON_SIZE, BUTTON_SIZE),
        }

    # ---------- hit testing ----------
    def button_at(self, pos: Tuple[int, int]) -> Optional[Direction]:
        for direction, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return direction
        return None

    def restart_hit(self, pos: Tuple[int, int]) -> bool:
        return self.restart_rect.collidepoint(pos)

    def on_board(self, pos: Tuple[int, int]) -> bool:
        return self.board_rect.collidepoint(pos)

    # ---------- drawing ----------
    def draw_cell(self, gx: int, gy: int, color: Tuple[int, int, int]) -> None:
        # 2px gap between cells
        size = self.cell_size - 2
        rect = pygame.Rect(gx * self.cell_size, HUD_HEIGHT + gy * self.cell_size, size, size)
        pygame.draw.rect(self.screen, color, rect)

    def draw(self, state: GameState, high_score: int = 0) -> None:
        self.screen.fill(PANEL)
        pygame.draw.rect(self.screen, BG, self.board_rect)

        board = state.board()
        for code, color in ((BODY, GREEN), (HEAD, HEAD_COLOR), (FOOD, RED)):
            for gy, gx in np.argwhere(board == code):
                self.draw_cell(int(gx), int(gy), color)

        txt = self.font.render(f"Score: {state.score}   Best: {high_score}", True, TEXT)
        self.screen.blit(txt, (8, (HUD_HEIGHT - txt.get_height()) // 2))

        self.draw_pad()

        if state.final_score is not None and not state.running:
            self.draw_game_over(state.final_score)

    def draw_pad(self) -> None:
        for direction, rect in self.buttons.items():
            pygame.draw.rect(self.screen, BUTTON, rect, border_radius=6)
            cx, cy = rect.center
            r = BUTTON_SIZE // 4
            dx, dy = direction.value
            # Arrow triangle: tip along the direction, base across it
            tip = (cx + dx * r, cy + dy * r)
            base_a = (cx - dx * r + dy * r, cy - dy * r + dx * r)
            base_b = (cx - dx * r - dy * r, cy - dy * r - dx * r)
            pygame.draw.polygon(self.screen, TEXT, [tip, base_a, base_b])

    def draw_game_over(self, score: int) -> None:
        # Dim the board with a translucent overlay
        overlay = pygame.Surface(self.board_rect.size, pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))  # RGBA
        self.screen.blit(overlay, self.board_rect.topleft)

        cx = self.board_px // 2
        cy = HUD_HEIGHT + self.board_px // 2
        title = self.font.render("GAME OVER", True, (240, 240, 250))
        sco = self.font.render(f"Final score: {score}", True, TEXT)
        self.screen.blit(title, title.get_rect(center=(cx, cy - 24)))
        self.screen.blit(sco, sco.get_rect(center=(cx, cy + 4)))

        pygame.draw.rect(self.screen, BUTTON, self.restart_rect, border_radius=6)
        label = self.font.render("Restart", True, TEXT)
        self.screen.blit(label, label.get_rect(center=self.restart_rect.center))
