"""
Menu States
Interactive demo of a strict state machine driving a module's menu items.

State One leads to Two or Three, both of which only lead back to One. Each of
Two and Three owns a menu item: its enter handler enables the item, its leave
handler disables it again.
"""

import enum
import sys

import pygame

from simple_statemachine import IllegalTransitionError, StateMachine, format_state

# --- Configuration ---
WIDTH, HEIGHT = 640, 360
FPS = 30
TITLE = "simple-statemachine: Menu States"
LOG_LINES = 8

# Colors
BG_COLOR = (26, 26, 46)
HUD_COLOR = (200, 200, 220)
ACTIVE_COLOR = (0, 255, 100)
INACTIVE_COLOR = (90, 90, 110)
CURRENT_COLOR = (255, 215, 0)
ERROR_COLOR = (255, 100, 100)


class State(enum.Enum):
    One = 1
    Two = 2
    Three = 3


KEY_STATES = {
    pygame.K_1: State.One,
    pygame.K_2: State.Two,
    pygame.K_3: State.Three,
}


def build_machine(menu: dict[str, bool], log: list[tuple[str, tuple[int, int, int]]]) -> StateMachine:
    sm = StateMachine(
        strict=True,
        transitions={
            State.One: [State.Two, State.Three],
            State.Two: [State.One],
            State.Three: [State.One],
        },
        name="menu",
    )

    def toggler(item: str, active: bool):
        def handler(_other) -> None:
            menu[item] = active
        return handler

    sm.add_state_handlers(
        State.Two, enter_handler=toggler("State: TWO", True),
        leave_handler=toggler("State: TWO", False))
    sm.add_state_handlers(
        State.Three, enter_handler=toggler("State: THREE", True),
        leave_handler=toggler("State: THREE", False))
    sm.on_after_transition(lambda old, new: log.append(
        (f"{format_state(old)} => {format_state(new)}", HUD_COLOR)))
    return sm


def main():
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 16)

    menu = {"State: TWO": False, "State: THREE": False}
    log: list[tuple[str, tuple[int, int, int]]] = []
    sm = build_machine(menu, log)
    sm.current_state = State.One

    running = True
    while running:
        pg_clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_s:
                    sm.current_state = None if sm.is_started else State.One
                elif event.key in KEY_STATES:
                    try:
                        sm.current_state = KEY_STATES[event.key]
                    except IllegalTransitionError as e:
                        log.append((str(e), ERROR_COLOR))
        del log[:-LOG_LINES]

        # --- Draw ---
        screen.fill(BG_COLOR)

        y = 10
        for state in State:
            allowed = sm.check_can_switch_to(state)
            if state == sm.current_state:
                color = CURRENT_COLOR
            elif allowed:
                color = ACTIVE_COLOR
            else:
                color = INACTIVE_COLOR
            screen.blit(font.render(f"[{state.value}] {state.name}", True, color), (10, y))
            y += 22

        y += 10
        for item, active in menu.items():
            color = ACTIVE_COLOR if active else INACTIVE_COLOR
            screen.blit(font.render(item, True, color), (10, y))
            y += 22

        y += 10
        for line, color in log:
            screen.blit(font.render(line, True, color), (10, y))
            y += 20

        hud = f"State: {format_state(sm.current_state)}   1/2/3=Switch  S=Start/Stop  Esc=Quit"
        screen.blit(font.render(hud, True, HUD_COLOR), (10, HEIGHT - 26))

        pygame.display.flip()

    sm.current_state = None
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
