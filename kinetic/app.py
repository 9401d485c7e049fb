from __future__ import annotations

import logging

import pygame

from kinetic.settings import AppCfg
from kinetic.scroll_logic import ScrollLogic
from kinetic.input_router import InputRouter
from kinetic.ui.list_view import ListView
from kinetic.ui.scrollbar import Scrollbar, ScrollbarStyle

logger = logging.getLogger(__name__)


class DemoApp:
    """
    Minimal app shell around one ScrollLogic. It plays the three outside
    roles the scroller needs:
      - geometry source: window size / list height -> configure()
      - input source: mouse presses and drags -> begin/interact/end
        (touch arrives as emulated mouse events)
      - renderer: polls current_offset() every frame and draws the list
    """

    def __init__(self, cfg: AppCfg):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(cfg.window.title)

        self._flags = pygame.RESIZABLE | pygame.DOUBLEBUF
        self.screen = pygame.display.set_mode(
            (int(cfg.window.width), int(cfg.window.height)),
            flags=self._flags,
        )
        self.clock = pygame.time.Clock()
        self.running = True
        self.font = pygame.font.Font(None, 26)

        # input timestamps and the animation clock share pygame's tick counter
        self.scroller = ScrollLogic(
            cfg.scroll,
            cfg.tuning,
            clock=pygame.time.get_ticks,
            on_scrolling_complete=self._on_scrolling_complete,
        )
        self.list_view = ListView(cfg.demo, self.screen.get_rect())
        self.router = InputRouter(container=self.list_view, controls=self.list_view)
        self.scrollbar_style = ScrollbarStyle()
        self._pressed = False

        self._reflow()

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        while self.running:
            self.clock.tick(self.cfg.fps)

            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    self.running = False
                    break
                if e.type == pygame.VIDEORESIZE:
                    self._resize_to(e.w, e.h)
                    continue
                self.handle_event(e)

            self.list_view.offset = self.scroller.current_offset()
            self.draw()
            pygame.display.flip()

        pygame.quit()

    def handle_event(self, e: pygame.event.Event) -> bool:
        """ Translate pygame input into scroller calls. Returns True if consumed. """
        now = pygame.time.get_ticks()
        scroller = self.scroller

        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            if self.router.interaction_allowed(e.pos):
                scroller.begin_interaction(e.pos[1], now)
                self._pressed = True
                return True
            # refused: either outside the list or on a control, which consumes the press
            if self.router.on_control(e.pos):
                logger.info("Control row %s pressed", self.list_view.row_at(e.pos))
                return True
            return False

        if e.type == pygame.MOUSEMOTION and self._pressed:
            scroller.interact(e.pos[1], now)
            return True

        if e.type == pygame.MOUSEBUTTONUP and e.button == 1 and self._pressed:
            self._pressed = False
            scroller.end_interaction(now)
            return True

        if e.type == pygame.MOUSEWHEEL and not self._pressed:
            scroller.scroll_by(-e.y * self.cfg.demo.wheel_pixels, True)
            return True

        if e.type == pygame.KEYDOWN and not self._pressed:
            page = self.list_view.rect.h * 0.9
            if e.key == pygame.K_HOME:
                scroller.scroll_to(0, True)
            elif e.key == pygame.K_END:
                scroller.scroll_to(scroller.max_offset(), True)
            elif e.key == pygame.K_PAGEDOWN:
                scroller.scroll_by(page, True)
            elif e.key == pygame.K_PAGEUP:
                scroller.scroll_by(-page, True)
            elif e.key == pygame.K_ESCAPE:
                self.running = False
            else:
                return False
            return True

        return False

    def draw(self) -> None:
        self.screen.fill(self.cfg.window.bg_rgb)
        self.list_view.draw(self.screen, self.font)
        Scrollbar.draw(
            self.screen,
            self.list_view.rect,
            self.list_view.content_height(),
            self.list_view.offset,
            self.scroller.max_offset(),
            self.scrollbar_style,
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _reflow(self) -> None:
        """ Push the current geometry into the scroller. """
        self.list_view.rect = self.screen.get_rect()
        self.scroller.configure(self.list_view.rect.h, self.list_view.content_height())

    def _resize_to(self, w: int, h: int) -> None:
        w = max(1, int(w))
        h = max(1, int(h))
        self.screen = pygame.display.set_mode((w, h), flags=self._flags)
        self._reflow()

    def _on_scrolling_complete(self) -> None:
        logger.debug("Scrolling settled at %s", self.scroller.current_offset())
