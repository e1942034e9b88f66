import pygame
from dataclasses import dataclass
from typing import Tuple, Optional, Set
from kadastr_model import PuzzleBoard, Pos
import grid_style

@dataclass
class Camera:
    offset_x: float = 0.0
    offset_y: float = 0.0
    zoom: float = 1.0

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return (sx - self.offset_x) / self.zoom, (sy - self.offset_y) / self.zoom

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        return wx * self.zoom + self.offset_x, wy * self.zoom + self.offset_y

    def fit(self, area: Tuple[int, int, int, int], world_size: Tuple[float, float],
            margin: int = 20, max_zoom: float = 2.0) -> None:
        """Scale and center a world rectangle inside the screen area (x, y, w, h)."""
        ax, ay, aw, ah = area
        ww, wh = world_size
        avail_w = max(1, aw - 2 * margin)
        avail_h = max(1, ah - 2 * margin)
        self.zoom = max(0.1, min(max_zoom, avail_w / ww, avail_h / wh))
        self.offset_x = ax + (aw - ww * self.zoom) * 0.5
        self.offset_y = ay + (ah - wh * self.zoom) * 0.5

def clamp_int(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))

def cell_rect(camera: Camera, base_cell_size: int, r: int, c: int) -> pygame.Rect:
    sx, sy = camera.world_to_screen(c * base_cell_size, r * base_cell_size)
    ex, ey = camera.world_to_screen((c + 1) * base_cell_size, (r + 1) * base_cell_size)
    return pygame.Rect(int(sx), int(sy), int(ex) - int(sx), int(ey) - int(sy))

def draw_house(screen: pygame.Surface, rect: pygame.Rect, color: Tuple[int, int, int]) -> None:
    w, h = rect.width, rect.height
    body = pygame.Rect(int(rect.x + w * 0.25), int(rect.y + h * 0.45), int(w * 0.5), int(h * 0.4))
    roof = [
        (rect.x + w * 0.15, rect.y + h * 0.48),
        (rect.centerx, rect.y + h * 0.15),
        (rect.x + w * 0.85, rect.y + h * 0.48),
    ]
    pygame.draw.rect(screen, color, body)
    pygame.draw.polygon(screen, grid_style.COLOR_ROOF, roof)
    door = pygame.Rect(int(rect.centerx - w * 0.07), int(rect.y + h * 0.62), int(w * 0.14), int(h * 0.23))
    pygame.draw.rect(screen, grid_style.COLOR_ROOF, door)

def draw_x_mark(screen: pygame.Surface, rect: pygame.Rect, color: Tuple[int, int, int]) -> None:
    inset = rect.width * 0.3
    width = max(2, rect.width // 14)
    pygame.draw.line(screen, color, (rect.x + inset, rect.y + inset), (rect.right - inset, rect.bottom - inset), width)
    pygame.draw.line(screen, color, (rect.right - inset, rect.y + inset), (rect.x + inset, rect.bottom - inset), width)

def draw_board(
    screen: pygame.Surface,
    board: PuzzleBoard,
    camera: Camera,
    base_cell_size: int,
    highlight_house: Optional[Pos] = None,
    highlight_cells: Optional[Set[Pos]] = None
) -> None:
    rows, cols = board.rows, board.cols
    if camera.zoom * base_cell_size < 2:
        return

    for r in range(rows):
        for c in range(cols):
            rect = cell_rect(camera, base_cell_size, r, c)
            region = board.region_at(r, c)
            pygame.draw.rect(screen, grid_style.REGION_COLORS[region % len(grid_style.REGION_COLORS)], rect)
            pygame.draw.rect(screen, grid_style.COLOR_GRID_LINES, rect, 1)

            if board.has_house(r, c):
                color = grid_style.COLOR_HINT_HOUSE if board.is_hint_house(r, c) else grid_style.COLOR_HOUSE
                if highlight_house is not None and (r, c) == highlight_house:
                    color = grid_style.COLOR_HIGHLIGHT
                draw_house(screen, rect, color)
            elif board.is_blocked(r, c):
                color = grid_style.COLOR_X_MARK
                if highlight_cells and (r, c) in highlight_cells:
                    color = grid_style.COLOR_HIGHLIGHT
                draw_x_mark(screen, rect, color)

    # Thick borders between regions
    border = max(2, int(3 * camera.zoom))
    for r in range(rows):
        for c in range(cols):
            rect = cell_rect(camera, base_cell_size, r, c)
            region = board.region_at(r, c)
            if r + 1 < rows and board.region_at(r + 1, c) != region:
                pygame.draw.line(screen, grid_style.COLOR_REGION_BORDER, rect.bottomleft, rect.bottomright, border)
            if c + 1 < cols and board.region_at(r, c + 1) != region:
                pygame.draw.line(screen, grid_style.COLOR_REGION_BORDER, rect.topright, rect.bottomright, border)

    tl = cell_rect(camera, base_cell_size, 0, 0)
    br = cell_rect(camera, base_cell_size, rows - 1, cols - 1)
    outer = pygame.Rect(tl.x, tl.y, br.right - tl.x, br.bottom - tl.y)
    pygame.draw.rect(screen, grid_style.COLOR_REGION_BORDER, outer, border)

def pick_cell_from_mouse(board: PuzzleBoard, camera: Camera, base_cell_size: int, mouse_pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
    mx, my = mouse_pos
    wx, wy = camera.screen_to_world(mx, my)
    c = int(wx // base_cell_size)
    r = int(wy // base_cell_size)
    if 0 <= r < board.rows and 0 <= c < board.cols:
        return (r, c)
    return None
