from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

import pygame


@dataclass
class ScrollbarStyle:
    width: int = 6
    margin: int = 4
    radius: int = 3
    min_thumb_size: int = 24
    show_when_no_overflow: bool = False
    track_color: tuple[int, int, int, int] = (255, 255, 255, 32)
    thumb_color: tuple[int, int, int, int] = (255, 255, 255, 192)


class Scrollbar:
    """
    Stateless drawer for a simple vertical scrollbar.
    """
    @staticmethod
    def thumb_geometry(track_h: int, container_h: int, content_h: int,
                       offset: float, max_offset: float, min_thumb: int) -> Tuple[int, int]:
        """
        Returns (thumb_y, thumb_h) relative to the track top.
        While overscrolled the thumb shrinks by the overscroll distance and
        stays pinned to the edge it left.
        """
        if track_h <= 0:
            return 0, 0
        if content_h <= container_h:
            return 0, track_h

        ratio = max(0.0, min(1.0, container_h / max(1, content_h)))
        thumb_h = max(min_thumb, int(track_h * ratio))

        overshoot = 0.0
        if offset < 0:
            overshoot = -offset
        elif offset > max_offset:
            overshoot = offset - max_offset
        thumb_h = min(track_h, max(min_thumb, int(thumb_h - overshoot)))

        pos_ratio = max(0.0, min(1.0, offset / max(1e-6, max_offset)))
        free = max(0, track_h - thumb_h)
        return int(free * pos_ratio), thumb_h

    @staticmethod
    def draw(layer: pygame.Surface, viewport: pygame.Rect, content_h: int,
             offset: float, max_offset: float, style: ScrollbarStyle) -> None:
        track_x = viewport.right - style.margin - style.width
        track_y = viewport.y + style.margin
        track_h = viewport.h - 2 * style.margin
        if track_h <= 0 or style.width <= 0:
            return

        overflow = content_h > viewport.h
        if not overflow and not style.show_when_no_overflow:
            return

        track_rect = pygame.Rect(track_x, track_y, style.width, track_h)
        pygame.draw.rect(layer, style.track_color, track_rect, border_radius=style.radius)

        thumb_y, thumb_h = Scrollbar.thumb_geometry(
            track_h, viewport.h, content_h, offset, max_offset, style.min_thumb_size
        )
        thumb_rect = pygame.Rect(track_x, track_y + thumb_y, style.width, thumb_h)
        pygame.draw.rect(layer, style.thumb_color, thumb_rect, border_radius=style.radius)
