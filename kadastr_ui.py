"""
Kadastr (Pygame)

Place 8 houses on an 8x8 map of coloured plots: one house per row, per
column and per plot, and no two houses touching, not even diagonally.

Modes:
- Menu: Continue, New Game, Select Level (levels up to the highest reached).
- Game: click a free cell to build, click a house to demolish, click an X to
  see which house blocks it. Buttons: Hint, Clear Field, Menu.
- Win: shown after the last level of the set is completed.

Usage:
    python kadastr_ui.py [--maps maps/levels.txt] [--saves DIR] [--level N]
"""

import argparse
import os
from dataclasses import dataclass, field
from typing import Tuple, Optional, List, Set

import pygame
import pygame_gui

from kadastr_model import GRID_SIZE, Pos
from kadastr_maps import load_map_file
from kadastr_hints import HINT_ALL_USED
from kadastr_progress import ProgressStore
from kadastr_session import GameSession, ACTION_BLOCKED, ACTION_PLACED
from kadastr_drawing import Camera, draw_board, pick_cell_from_mouse, clamp_int
import grid_style


# ----------------------------
# UI Constants & Enums
# ----------------------------
MODE_MENU = 0
MODE_GAME = 1
MODE_WIN = 2

WINDOW_SIZE = (1280, 860)
PANEL_WIDTH = 300
BASE_CELL_SIZE = 64
HIGHLIGHT_SECONDS = 0.5
MAX_LOG_LINES = 100

DEFAULT_MAPS = os.path.join(os.path.dirname(os.path.abspath(__file__)), "maps", "levels.txt")


# ----------------------------
# App state
# ----------------------------

@dataclass
class HighlightState:
    house: Optional[Pos] = None
    cells: Set[Pos] = field(default_factory=set)
    time_left: float = 0.0

    def set(self, house: Optional[Pos], cells: Set[Pos]) -> None:
        self.house = house
        self.cells = set(cells)
        self.time_left = HIGHLIGHT_SECONDS

    def update(self, dt: float) -> None:
        if self.time_left <= 0.0:
            return
        self.time_left -= dt
        if self.time_left <= 0.0:
            self.clear()

    def clear(self) -> None:
        self.house = None
        self.cells = set()
        self.time_left = 0.0


@dataclass
class MainState:
    mode: int = MODE_MENU
    highlight: HighlightState = field(default_factory=HighlightState)
    level_complete_shown: bool = False


# ----------------------------
# Helpers
# ----------------------------

def html_escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
         .replace("<", "&lt;")
         .replace(">", "&gt;")
         .replace('"', "&quot;")
         .replace("'", "&#39;")
    )


def board_area(screen_size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    sw, sh = screen_size
    return (PANEL_WIDTH, 0, max(1, sw - PANEL_WIDTH), sh)


def level_items(session: GameSession) -> List[str]:
    return [f"Level {i + 1}" for i in range(session.unlocked_level_count())]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Kadastr puzzle game")
    parser.add_argument("--maps", default=DEFAULT_MAPS, help="Path to the level set file")
    parser.add_argument("--saves", default=None, help="Directory holding the saves folder")
    parser.add_argument("--level", type=int, default=None, help="Start directly at this level (1-based)")
    return parser.parse_args(argv)


# ----------------------------
# Main
# ----------------------------

def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    try:
        parsed = load_map_file(args.maps)
    except OSError as e:
        print(f"Error: cannot read '{args.maps}': {e}")
        return
    if not parsed.levels:
        print(f"No playable levels in {args.maps}")
        for msg in parsed.messages:
            print(msg)
        return

    session = GameSession(parsed.levels, ProgressStore(args.saves))

    pygame.init()
    pygame.display.set_caption("Kadastr")

    screen = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
    clock = pygame.time.Clock()

    font = pygame.font.SysFont("arial", 28, bold=True)

    ui_manager = pygame_gui.UIManager(screen.get_size())

    # Menu
    menu_win = pygame_gui.elements.UIWindow(
        pygame.Rect(20, 20, 260, 230),
        ui_manager,
        window_display_title="Kadastr"
    )
    menu_win.close_window_button.hide()
    btn_continue = pygame_gui.elements.UIButton(pygame.Rect(10, 10, 230, 40), "Continue", ui_manager, container=menu_win)
    btn_new_game = pygame_gui.elements.UIButton(pygame.Rect(10, 60, 230, 40), "New Game", ui_manager, container=menu_win)
    btn_select = pygame_gui.elements.UIButton(pygame.Rect(10, 110, 230, 40), "Select Level", ui_manager, container=menu_win)

    select_win = pygame_gui.elements.UIWindow(
        pygame.Rect(20, 270, 260, 400),
        ui_manager,
        window_display_title="Select Level",
        visible=False,
        resizable=True
    )
    select_win.close_window_button.hide()
    levels_list = pygame_gui.elements.UISelectionList(
        relative_rect=pygame.Rect(10, 10, 230, 300),
        item_list=[],
        manager=ui_manager,
        container=select_win,
        anchors={"left": "left", "right": "right", "top": "top", "bottom": "bottom"}
    )
    btn_close_select = pygame_gui.elements.UIButton(
        pygame.Rect(10, -46, 230, 34),
        "Close",
        ui_manager,
        container=select_win,
        anchors={"left": "left", "bottom": "bottom"}
    )

    # Game
    controls_win = pygame_gui.elements.UIWindow(
        pygame.Rect(20, 20, 260, 330),
        ui_manager,
        window_display_title="Controls",
        visible=False
    )
    controls_win.close_window_button.hide()
    lbl_level = pygame_gui.elements.UILabel(pygame.Rect(10, 10, 230, 28), "Level", ui_manager, container=controls_win)
    lbl_houses = pygame_gui.elements.UILabel(pygame.Rect(10, 40, 230, 28), "Houses", ui_manager, container=controls_win)
    lbl_hints = pygame_gui.elements.UILabel(pygame.Rect(10, 70, 230, 28), "Hints", ui_manager, container=controls_win)
    btn_hint = pygame_gui.elements.UIButton(pygame.Rect(10, 110, 230, 40), "Hint", ui_manager, container=controls_win)
    btn_clear = pygame_gui.elements.UIButton(pygame.Rect(10, 160, 230, 40), "Clear Field", ui_manager, container=controls_win)
    btn_menu = pygame_gui.elements.UIButton(pygame.Rect(10, 210, 230, 40), "Menu", ui_manager, container=controls_win)

    log_win = pygame_gui.elements.UIWindow(
        pygame.Rect(20, 370, 260, 300),
        ui_manager,
        window_display_title="Log",
        visible=False,
        resizable=True
    )
    log_win.close_window_button.hide()
    log_box = pygame_gui.elements.UITextBox(
        html_text="",
        relative_rect=pygame.Rect(10, 10, 230, 240),
        manager=ui_manager,
        container=log_win,
        anchors={"left": "left", "right": "right", "top": "top", "bottom": "bottom"}
    )

    complete_win = pygame_gui.elements.UIWindow(
        pygame.Rect(0, 0, 360, 180),
        ui_manager,
        window_display_title="Level complete!",
        visible=False
    )
    complete_win.close_window_button.hide()
    lbl_complete = pygame_gui.elements.UILabel(pygame.Rect(10, 10, 330, 40), "", ui_manager, container=complete_win)
    btn_next = pygame_gui.elements.UIButton(pygame.Rect(80, 60, 200, 44), "Next Level", ui_manager, container=complete_win)

    # Win
    win_win = pygame_gui.elements.UIWindow(
        pygame.Rect(0, 0, 400, 200),
        ui_manager,
        window_display_title="Congratulations!",
        visible=False
    )
    win_win.close_window_button.hide()
    pygame_gui.elements.UILabel(pygame.Rect(10, 10, 370, 40), "All levels completed.", ui_manager, container=win_win)
    btn_win_menu = pygame_gui.elements.UIButton(pygame.Rect(100, 70, 200, 44), "Menu", ui_manager, container=win_win)

    state = MainState()
    camera = Camera()
    world_size = (GRID_SIZE * BASE_CELL_SIZE, GRID_SIZE * BASE_CELL_SIZE)

    def layout() -> None:
        camera.fit(board_area(screen.get_size()), world_size)
        sw, sh = screen.get_size()
        for w in (complete_win, win_win):
            rect = w.get_abs_rect()
            w.set_position(((sw - rect.width) // 2, (sh - rect.height) // 2))

    log_lines: List[str] = []

    def log_append(msg: str) -> None:
        if not msg:
            return
        for line in msg.splitlines():
            line = line.strip()
            if line:
                log_lines.append(line)

        if len(log_lines) > MAX_LOG_LINES:
            del log_lines[0:len(log_lines) - MAX_LOG_LINES]

        html = "<br>".join(html_escape(ln) for ln in log_lines)
        log_box.set_text(html)

        if log_box.scroll_bar is not None:
            log_box.scroll_bar.set_scroll_from_start_percentage(1.0)

    def refresh_labels() -> None:
        lbl_level.set_text(f"Level {session.level_label()}")
        lbl_houses.set_text(f"Houses {session.house_label()}")
        lbl_hints.set_text(f"Hints used {session.hints_used}")

    def show_mode(mode: int) -> None:
        state.mode = mode
        state.highlight.clear()
        for w in (menu_win, select_win, controls_win, log_win, complete_win, win_win):
            w.hide()
        if mode == MODE_MENU:
            menu_win.show()
            if session.progress.has_saved_progress():
                btn_continue.enable()
            else:
                btn_continue.disable()
        elif mode == MODE_GAME:
            controls_win.show()
            log_win.show()
            refresh_labels()
        elif mode == MODE_WIN:
            win_win.show()
        layout()

    def enter_game() -> None:
        state.level_complete_shown = False
        show_mode(MODE_GAME)
        log_append(f"Level {session.level_label()} loaded.")

    def start_level(index: int) -> None:
        session.load_level(index)
        enter_game()

    def check_complete() -> None:
        refresh_labels()
        if session.is_level_complete() and not state.level_complete_shown:
            state.level_complete_shown = True
            lbl_complete.set_text(f"Level {session.level_index + 1} solved!")
            btn_next.set_text("Next Level" if session.has_next_level() else "Finish")
            complete_win.show()
            log_append("All 8 houses placed.")

    def is_over_ui(pos: Tuple[int, int]) -> bool:
        for w in (menu_win, select_win, controls_win, log_win, complete_win, win_win):
            if w.visible and w.get_abs_rect().collidepoint(pos):
                return True
        return False

    for msg in parsed.messages:
        log_append(msg)

    if args.level is not None:
        start_level(clamp_int(args.level - 1, 0, len(session.levels) - 1))
    else:
        show_mode(MODE_MENU)

    running = True
    while running:
        time_delta = clock.tick(60) / 1000.0
        state.highlight.update(time_delta)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break

            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                ui_manager.set_window_resolution(event.size)
                layout()

            ui_manager.process_events(event)

            if event.type == pygame_gui.UI_BUTTON_PRESSED:
                if event.ui_element == btn_continue:
                    start_level(session.continue_level_index())

                elif event.ui_element == btn_new_game:
                    session.new_game()
                    enter_game()

                elif event.ui_element == btn_select:
                    levels_list.set_item_list(level_items(session))
                    select_win.show()

                elif event.ui_element == btn_close_select:
                    select_win.hide()

                elif event.ui_element == btn_hint:
                    outcome = session.use_hint()
                    log_append(outcome.message)
                    if outcome.kind != HINT_ALL_USED:
                        state.highlight.clear()
                    check_complete()

                elif event.ui_element == btn_clear:
                    removed = session.clear_field()
                    state.level_complete_shown = False
                    state.highlight.clear()
                    refresh_labels()
                    log_append(f"Field cleared ({removed} houses removed).")

                elif event.ui_element == btn_menu:
                    show_mode(MODE_MENU)

                elif event.ui_element == btn_next:
                    if session.next_level():
                        enter_game()
                    else:
                        show_mode(MODE_WIN)

                elif event.ui_element == btn_win_menu:
                    show_mode(MODE_MENU)

            if event.type == pygame_gui.UI_SELECTION_LIST_NEW_SELECTION and event.ui_element == levels_list:
                items = level_items(session)
                if event.text in items:
                    start_level(items.index(event.text))

            if event.type == pygame.MOUSEBUTTONUP and event.button == 1 and state.mode == MODE_GAME:
                if is_over_ui(event.pos) or state.level_complete_shown:
                    continue
                cell = pick_cell_from_mouse(session.board, camera, BASE_CELL_SIZE, event.pos)
                if cell is None:
                    continue
                r, c = cell
                res = session.click_cell(r, c)
                if res.action == ACTION_BLOCKED:
                    blocker = res.blocker.pos if res.blocker is not None else None
                    state.highlight.set(blocker, res.highlight)
                else:
                    state.highlight.clear()
                if res.action != ACTION_PLACED:
                    log_append(res.message)
                check_complete()

        ui_manager.update(time_delta)

        screen.fill(grid_style.COLOR_BG)

        if state.mode == MODE_GAME:
            draw_board(
                screen, session.board, camera, BASE_CELL_SIZE,
                highlight_house=state.highlight.house,
                highlight_cells=state.highlight.cells
            )
        else:
            title = font.render("Kadastr", True, grid_style.COLOR_TEXT)
            sub = font.render("One house in every row, column and plot", True, grid_style.COLOR_TEXT_DIM)
            x0, y0, aw, ah = board_area(screen.get_size())
            screen.blit(title, (x0 + (aw - title.get_width()) // 2, ah // 2 - 40))
            screen.blit(sub, (x0 + (aw - sub.get_width()) // 2, ah // 2 + 10))

        ui_manager.draw_ui(screen)

        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
