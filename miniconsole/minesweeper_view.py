"""Draws a Minesweeper board onto a pygame surface."""

from __future__ import annotations

import pygame

from miniconsole.hud import HudLine, load_font

BACKGROUND = (20, 24, 34)
PLATE_FILL = (10, 12, 18, 210)
PLATE_OUTLINE = (86, 98, 128, 160)
HIDDEN_COLOR = (90, 100, 118)
REVEALED_COLOR = (186, 192, 205)
EXPLODED_COLOR = (170, 70, 70)
MINE_COLOR = (32, 32, 36)
FLAG_COLOR = (255, 90, 90)
HOVER_FILL = (255, 255, 255, 24)

_NUMBER_COLORS = (
    (0, 0, 0),
    (60, 120, 255),
    (50, 160, 80),
    (230, 70, 70),
    (30, 40, 160),
    (130, 20, 20),
    (60, 150, 150),
    (40, 40, 40),
    (110, 110, 110),
)


def number_color(n: int) -> tuple[int, int, int]:
    """Colour of an adjacent-mine count; counts outside 0..8 use the nearest end."""
    return _NUMBER_COLORS[max(0, min(len(_NUMBER_COLORS) - 1, n))]


def _rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(round(x), round(y), max(0, round(w)), max(0, round(h)))


def _translucent_rect(surface: pygame.Surface, rect: pygame.Rect, fill, outline=None) -> None:
    layer = pygame.Surface((rect.width + 2, rect.height + 2), pygame.SRCALPHA)
    if outline is not None:
        pygame.draw.rect(layer, outline, layer.get_rect(), 1)
    layer.fill(fill, pygame.Rect(1, 1, rect.width, rect.height))
    surface.blit(layer, (rect.x - 1, rect.y - 1))


class MinesweeperView:
    """Renders the board, hover highlight, flags, mines, counts and a HUD line."""

    def __init__(self) -> None:
        self.hud = HudLine(18, (220, 230, 240))

    def draw(
        self,
        surface: pygame.Surface,
        world,
        origin_x: float,
        origin_y: float,
        cell_size: float,
        hover: tuple[int, int] | None = None,
    ) -> None:
        """Draw the board with its top-left tile at the origin; ``hover`` is a cell or None."""
        surface.fill(BACKGROUND)
        _translucent_rect(
            surface,
            _rect(origin_x - 4.0, origin_y - 4.0, world.cols * cell_size + 8.0, world.rows * cell_size + 8.0),
            PLATE_FILL,
            PLATE_OUTLINE,
        )
        glyph_font = load_font(max(1, int(cell_size * 0.62)))

        for y in range(world.rows):
            for x in range(world.cols):
                cell = world.cell(x, y)
                left = origin_x + x * cell_size
                top = origin_y + y * cell_size
                if cell.is_revealed:
                    color = EXPLODED_COLOR if cell.is_mine else REVEALED_COLOR
                else:
                    color = HIDDEN_COLOR
                pygame.draw.rect(surface, color, _rect(left, top, cell_size - 1.0, cell_size - 1.0))

                if hover == (x, y) and not cell.is_revealed:
                    _translucent_rect(
                        surface, _rect(left + 1.0, top + 1.0, cell_size - 3.0, cell_size - 3.0), HOVER_FILL
                    )

                if cell.is_flagged and not cell.is_revealed:
                    glyph = glyph_font.render("F", True, FLAG_COLOR)
                    surface.blit(glyph, (round(left + cell_size * 0.26), round(top + cell_size * 0.08)))
                elif cell.is_revealed and cell.is_mine:
                    centre = (round(left + cell_size * 0.5), round(top + cell_size * 0.5))
                    pygame.draw.circle(surface, MINE_COLOR, centre, max(1, round(cell_size * 0.2)))
                elif cell.is_revealed and cell.adj_mines > 0:
                    glyph = glyph_font.render(str(cell.adj_mines), True, number_color(cell.adj_mines))
                    surface.blit(glyph, (round(left + cell_size * 0.28), round(top + cell_size * 0.08)))

        self.hud.draw(surface, 36, (16, 12), surface.get_width() - 36)