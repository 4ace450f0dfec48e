# lanerunner/game/controls.py
"""
Input side of the game: turns keys, swipes and on-screen buttons into Intents.
Handlers only queue intents; the engine consumes one batch per frame.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import pygame
from .config import (
    TOUCH_THRESHOLD_PX, TAP_MAX_MS, BUTTON_SIZE, BUTTON_GAP, BUTTON_MARGIN
)
from .engine import Intent

KEYMAP: Dict[int, Intent] = {
    pygame.K_LEFT: Intent.LANE_LEFT,
    pygame.K_a: Intent.LANE_LEFT,
    pygame.K_RIGHT: Intent.LANE_RIGHT,
    pygame.K_d: Intent.LANE_RIGHT,
    pygame.K_UP: Intent.JUMP,
    pygame.K_w: Intent.JUMP,
    pygame.K_SPACE: Intent.JUMP,
    pygame.K_DOWN: Intent.SLIDE,
    pygame.K_s: Intent.SLIDE,
}


def intent_for_key(key: int) -> Optional[Intent]:
    return KEYMAP.get(key)


def classify_swipe(dx: float, dy: float, duration_ms: float) -> Intent:
    """
    Map a finished touch/drag onto one intent (screen coords, +y is down):
    - short quick touch -> JUMP (tap)
    - mostly horizontal -> lane change toward dx
    - mostly vertical   -> SLIDE when dragged down, JUMP when dragged up
    """
    adx, ady = abs(dx), abs(dy)
    if max(adx, ady) < TOUCH_THRESHOLD_PX and duration_ms < TAP_MAX_MS:
        return Intent.JUMP
    if adx > ady:
        return Intent.LANE_RIGHT if dx > 0 else Intent.LANE_LEFT
    return Intent.SLIDE if dy > 0 else Intent.JUMP


BUTTON_ORDER: Tuple[Intent, ...] = (Intent.LANE_LEFT, Intent.JUMP, Intent.SLIDE, Intent.LANE_RIGHT)


def button_layout(width: int, height: int) -> List[Tuple[pygame.Rect, Intent]]:
    """On-screen buttons as one row centred along the bottom edge."""
    row_w = len(BUTTON_ORDER) * BUTTON_SIZE + (len(BUTTON_ORDER) - 1) * BUTTON_GAP
    x = (width - row_w) // 2
    y = height - BUTTON_MARGIN - BUTTON_SIZE
    layout = []
    for intent in BUTTON_ORDER:
        layout.append((pygame.Rect(x, y, BUTTON_SIZE, BUTTON_SIZE), intent))
        x += BUTTON_SIZE + BUTTON_GAP
    return layout


def intent_for_point(buttons, x: float, y: float) -> Optional[Intent]:
    for rect, intent in buttons:
        if rect.collidepoint(int(x), int(y)):
            return intent
    return None


class IntentQueue:
    """Collects intents between frames; drain() hands them to RunEngine.step."""

    def __init__(self, buttons: Optional[List[Tuple[pygame.Rect, Intent]]] = None):
        self._pending: List[Intent] = []
        self._touch_start: Optional[Tuple[float, float, float]] = None
        self.buttons = buttons or []

    def __len__(self) -> int:
        return len(self._pending)

    def push(self, intent: Optional[Intent]):
        if intent is not None:
            self._pending.append(intent)

    def drain(self) -> Tuple[Intent, ...]:
        batch = tuple(self._pending)
        self._pending.clear()
        return batch

    def clear(self):
        self._pending.clear()
        self._touch_start = None

    def begin_touch(self, x: float, y: float, t_ms: float):
        # a press on a button fires at once and is not the start of a swipe
        pressed = intent_for_point(self.buttons, x, y)
        if pressed is not None:
            self.push(pressed)
            self._touch_start = None
            return
        self._touch_start = (x, y, t_ms)

    def end_touch(self, x: float, y: float, t_ms: float):
        if self._touch_start is None:
            return
        x0, y0, t0 = self._touch_start
        self._touch_start = None
        self.push(classify_swipe(x - x0, y - y0, t_ms - t0))

    def handle_event(self, event: pygame.event.Event):
        """Feed one pygame event: keys, button presses, left-mouse drags and finger swipes."""
        if event.type == pygame.KEYDOWN:
            self.push(intent_for_key(event.key))
        elif getattr(event, "touch", False):
            return  # SDL mirrors finger input as mouse events
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.begin_touch(event.pos[0], event.pos[1], pygame.time.get_ticks())
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.end_touch(event.pos[0], event.pos[1], pygame.time.get_ticks())
        elif event.type == pygame.FINGERDOWN:
            # finger coords are normalised to [0,1]
            w, h = pygame.display.get_surface().get_size()
            self.begin_touch(event.x * w, event.y * h, pygame.time.get_ticks())
        elif event.type == pygame.FINGERUP:
            w, h = pygame.display.get_surface().get_size()
            self.end_touch(event.x * w, event.y * h, pygame.time.get_ticks())
