# lanerunner/game/render.py
from __future__ import annotations
from typing import Dict, Tuple
import pygame
from .config import (
    LANES, TRACK_MAX_W, TRACK_W_RATIO, PLAYER_SIZE, SLIDE_SCALE,
    COLOR_BG_TOP, COLOR_BG_BOTTOM, COLOR_LANE, COLOR_LANE_DARK, COLOR_DASH,
    COLOR_ACCENT, COLOR_ACCENT_2, COLOR_DANGER, COLOR_ROCK, COLOR_BAR,
    COLOR_BAR_TRIM, COLOR_FG, COLOR_SHADOW
)
from .engine import Intent, RunSnapshot
from .obstacles import ObstacleKind
from .player import PlayerMode

DASH_H = 36
DASH_GAP = 28

_backgrounds: Dict[Tuple[int, int], pygame.Surface] = {}


def track_geometry(width: int) -> Tuple[float, float]:
    """(left, lane_width) of the lane strip centred in a window of this width."""
    track_w = min(width * TRACK_W_RATIO, TRACK_MAX_W)
    return (width - track_w) / 2, track_w / LANES


def lane_center_x(lane: int, width: int) -> int:
    left, lane_w = track_geometry(width)
    return int(left + lane_w * lane + lane_w / 2)


def _background(size: Tuple[int, int]) -> pygame.Surface:
    """Vertical gradient, built once per window size."""
    bg = _backgrounds.get(size)
    if bg is None:
        w, h = size
        bg = pygame.Surface(size)
        for y in range(h):
            t = y / max(1, h - 1)
            color = tuple(int(a + (b - a) * t) for a, b in zip(COLOR_BG_TOP, COLOR_BG_BOTTOM))
            pygame.draw.line(bg, color, (0, y), (w, y))
        _backgrounds[size] = bg
    return bg


def draw_track(surf: pygame.Surface, scroll_px: float):
    w, h = surf.get_size()
    surf.blit(_background((w, h)), (0, 0))

    left, lane_w = track_geometry(w)
    pygame.draw.rect(surf, COLOR_LANE_DARK,
                     pygame.Rect(int(left - 18), 0, int(lane_w * LANES + 36), h), border_radius=22)
    for i in range(LANES):
        color = COLOR_LANE if i % 2 == 0 else COLOR_LANE_DARK
        pygame.draw.rect(surf, color, pygame.Rect(int(left + i * lane_w), 0, int(lane_w) + 1, h))

    # Dashed separators slide down with the scroll to suggest motion
    offset = scroll_px % (DASH_H + DASH_GAP)
    for i in range(1, LANES):
        cx = int(left + i * lane_w)
        y = offset - (DASH_H + DASH_GAP)
        while y < h:
            pygame.draw.rect(surf, COLOR_DASH, pygame.Rect(cx - 1, int(y), 2, DASH_H))
            y += DASH_H + DASH_GAP


def _draw_rock(surf: pygame.Surface, x: int, y: int):
    w, h = 52, 36
    pygame.draw.rect(surf, COLOR_ROCK, pygame.Rect(x - w // 2, y - h, w, h), border_radius=8)
    pygame.draw.rect(surf, (120, 130, 170), pygame.Rect(x - w // 2, y - 6, w, 3))


def _draw_bar(surf: pygame.Surface, x: int, y: int):
    w = 62
    pygame.draw.rect(surf, COLOR_BAR, pygame.Rect(x - w // 2, y - 68, w, 10), border_radius=4)
    pygame.draw.rect(surf, COLOR_BAR_TRIM, pygame.Rect(x - w // 2 + 10, y - 84, w - 20, 6), border_radius=3)


def _draw_wall(surf: pygame.Surface, x: int, y: int, lane_w: float):
    w = int(lane_w - 8)
    pygame.draw.rect(surf, COLOR_DANGER, pygame.Rect(x - w // 2, y - 80, w, 80), border_radius=10)


def draw_player(surf: pygame.Surface, snap: RunSnapshot):
    w, _ = surf.get_size()
    x = lane_center_x(snap.lane, w)
    y = int(snap.ground_y + snap.vertical_offset)
    size = int(PLAYER_SIZE * SLIDE_SCALE) if snap.mode is PlayerMode.SLIDING else PLAYER_SIZE

    shadow = pygame.Surface((int(size * 1.4), int(size * 0.56)), pygame.SRCALPHA)
    pygame.draw.ellipse(shadow, (*COLOR_SHADOW, 90), shadow.get_rect())
    surf.blit(shadow, (x - shadow.get_width() // 2, int(snap.ground_y) + 12 - shadow.get_height() // 2))

    body = COLOR_ACCENT if snap.alive else COLOR_DANGER
    pygame.draw.rect(surf, body, pygame.Rect(x - size // 2, y - size, size, size), border_radius=10)
    pygame.draw.rect(surf, COLOR_ACCENT_2, pygame.Rect(x - size // 2, y - size // 3, size, size // 3),
                     border_bottom_left_radius=10, border_bottom_right_radius=10)


def draw_world(surf: pygame.Surface, snap: RunSnapshot, scroll_px: float = 0.0):
    """Draw track, obstacles and player. Obstacle y is used directly as screen y."""
    draw_track(surf, scroll_px)
    w, _ = surf.get_size()
    _, lane_w = track_geometry(w)
    for o in snap.obstacles:
        x, y = lane_center_x(o.lane, w), int(o.y)
        if o.kind is ObstacleKind.ROCK:
            _draw_rock(surf, x, y)
        elif o.kind is ObstacleKind.BAR:
            _draw_bar(surf, x, y)
        else:
            _draw_wall(surf, x, y, lane_w)
    draw_player(surf, snap)


def draw_hud(surf: pygame.Surface, font: pygame.font.Font, snap: RunSnapshot, best: int, seed: int):
    hud = f"Score: {snap.score}   Best: {best}   Speed: x{snap.speed_multiplier:.2f}   Seed: {seed}"
    surf.blit(font.render(hud, True, COLOR_FG), (12, 10))
    surf.blit(font.render("←/→ lane | ↑/SPACE jump | ↓ slide | ESC quit", True, (160, 180, 210)), (12, 32))


def draw_panel(surf: pygame.Surface, font: pygame.font.Font, lines):
    """Centered overlay panel (start / game over screens)."""
    w, h = surf.get_size()
    panel_w, panel_h = 360, 28 * len(lines) + 32
    rect = pygame.Rect((w - panel_w) // 2, (h - panel_h) // 2, panel_w, panel_h)
    pygame.draw.rect(surf, (40, 60, 90), rect, border_radius=10)
    pygame.draw.rect(surf, (90, 130, 180), rect, width=2, border_radius=10)
    for i, msg in enumerate(lines):
        txt = font.render(msg, True, (220, 235, 255))
        surf.blit(txt, (rect.centerx - txt.get_width() // 2, rect.top + 16 + i * 28))


def _arrow(rect: pygame.Rect, intent: Intent):
    """Triangle pointing the way the button acts."""
    cx, cy, r = rect.centerx, rect.centery, rect.width // 4
    if intent is Intent.LANE_LEFT:
        return [(cx - r, cy), (cx + r, cy - r), (cx + r, cy + r)]
    if intent is Intent.LANE_RIGHT:
        return [(cx + r, cy), (cx - r, cy - r), (cx - r, cy + r)]
    if intent is Intent.JUMP:
        return [(cx, cy - r), (cx - r, cy + r), (cx + r, cy + r)]
    return [(cx, cy + r), (cx - r, cy - r), (cx + r, cy - r)]


def draw_buttons(surf: pygame.Surface, buttons):
    """On-screen lane / jump / slide buttons (see controls.button_layout)."""
    for rect, intent in buttons:
        pygame.draw.rect(surf, (40, 60, 90), rect, border_radius=12)
        pygame.draw.rect(surf, (90, 130, 180), rect, width=2, border_radius=12)
        pygame.draw.polygon(surf, COLOR_FG, _arrow(rect, intent))
