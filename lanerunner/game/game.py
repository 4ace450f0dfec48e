# lanerunner/game/game.py
import sys, argparse, logging, random
import pygame
from pygame import K_ESCAPE, K_RETURN, K_r, K_n
from .config import WIDTH, HEIGHT, FPS, HISCORE_FILE
from .clock import SimulationClock
from .controls import IntentQueue, button_layout
from .engine import RunEngine
from .highscore import HighScoreStore
from .render import draw_world, draw_hud, draw_panel, draw_buttons

logger = logging.getLogger(__name__)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for a random seed each launch.")
    p.add_argument("--hiscore-file", type=str, default=HISCORE_FILE,
                   help="Where the best score is kept.")
    p.add_argument("--debug", action="store_true", help="Verbose logging (spawns, game over).")
    return p.parse_args()


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def run():
    args = parse_args()
    setup_logging(args.debug)

    pygame.init()
    pygame.display.set_caption("Lane Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    frame_clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)

    store = HighScoreStore(args.hiscore_file)
    best = store.best()
    final_score = 0

    def on_game_over(score: int):
        nonlocal best, final_score
        final_score = score
        best = store.submit(score)

    engine = RunEngine(seed=args.seed, track_length=HEIGHT, on_game_over=on_game_over)
    sim_clock = SimulationClock()
    buttons = button_layout(WIDTH, HEIGHT)
    intents = IntentQueue(buttons)
    state = "menu"    # "menu" | "playing" | "gameover"
    scroll_px = 0.0
    logger.info("seed=%d best=%d", engine.seed, best)

    def start_run(seed=None):
        nonlocal state, scroll_px
        engine.reset(seed)
        intents.clear()
        sim_clock.reset()
        scroll_px = 0.0
        state = "playing"

    while True:
        frame_clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN and event.key == K_ESCAPE:
                pygame.quit(); sys.exit()

            if state == "playing":
                intents.handle_event(event)
            elif state == "menu":
                if event.type == pygame.KEYDOWN and event.key == K_RETURN:
                    start_run()
                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    start_run()
            elif state == "gameover" and event.type == pygame.KEYDOWN:
                if event.key in (K_r, K_RETURN):
                    start_run(seed=engine.seed)   # same seed, same obstacles
                if event.key == K_n:
                    start_run(seed=random.randrange(1, 2**32))

        if state == "playing":
            dt = sim_clock.tick(pygame.time.get_ticks() / 1000.0)
            result = engine.step(dt, intents.drain())
            scroll_px += engine.speed * dt
            if not result.alive:
                state = "gameover"

        # --- Render ---
        snap = engine.snapshot()
        draw_world(screen, snap, scroll_px)
        draw_hud(screen, font, snap, best, engine.seed)
        if state == "playing":
            draw_buttons(screen, buttons)

        if state == "menu":
            draw_panel(screen, font, ["LANE RUNNER", "Press ENTER or click to start"])
        elif state == "gameover":
            cause = engine.death_cause.value if engine.death_cause else "?"
            draw_panel(screen, font, [
                f"Crashed into a {cause}",
                f"Score: {final_score}   Best: {best}",
                "Retry (R)   New Random (N)",
            ])

        pygame.display.flip()


if __name__ == "__main__":
    run()
