"""HUD text helpers: font lookup, fitting text to a width and the status bar."""

from __future__ import annotations

from functools import lru_cache

import pygame

FONT_CANDIDATES = (
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "/Library/Fonts/Arial.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "C:/Windows/Fonts/arial.ttf",
)

HUD_FILL = (10, 12, 18, 175)
HUD_OUTLINE = (80, 94, 124, 150)
HUD_BOX_POS = (10, 8)
MIN_FONT_SIZE = 11


@lru_cache(maxsize=None)
def load_font(size: int) -> pygame.font.Font:
    """A font of the given pixel size: the first system font found, else pygame's own."""
    if not pygame.font.get_init():
        pygame.font.init()
    size = max(1, int(size))
    for path in FONT_CANDIDATES:
        try:
            return pygame.font.Font(path, size)
        except (OSError, pygame.error):
            continue
    return pygame.font.Font(None, size)


def fit_font_size(text: str, max_width: float, max_size: int, min_size: int = MIN_FONT_SIZE) -> int:
    """Largest size from ``max_size`` down to ``min_size`` at which ``text`` fits ``max_width``."""
    size = max_size
    while size > min_size and load_font(size).size(text)[0] > max_width:
        size -= 1
    return size


class HudLine:
    """One line of status text drawn over a translucent bar at the top of the screen."""

    def __init__(self, size: int, color: tuple[int, int, int]) -> None:
        self.size = size
        self.color = color
        self.text = ""

    def draw(
        self,
        surface: pygame.Surface,
        box_height: int,
        text_pos: tuple[float, float],
        max_width: float,
    ) -> int:
        """Draw the bar and the text; returns the font size used."""
        width = max(0, surface.get_width() - 2 * HUD_BOX_POS[0])
        box = pygame.Surface((width + 2, box_height + 2), pygame.SRCALPHA)
        pygame.draw.rect(box, HUD_OUTLINE, box.get_rect(), 1)
        box.fill(HUD_FILL, pygame.Rect(1, 1, width, box_height))
        surface.blit(box, (HUD_BOX_POS[0] - 1, HUD_BOX_POS[1] - 1))

        size = fit_font_size(self.text, max_width, self.size)
        if self.text:
            rendered = load_font(size).render(self.text, True, self.color)
            surface.blit(rendered, (round(text_pos[0]), round(text_pos[1])))
        return size