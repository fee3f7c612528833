# hajime_run/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE
from .config import WIDTH, HEIGHT, FPS, DT_CLAMP, WINDOW_SCALE, SEED_DEFAULT
from .assets import AssetError, load_assets, placeholder_assets
from .controller import GameController, prompt_verb
from .render import PygameCanvas

JUMP_KEYS = (K_SPACE, K_UP)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Hajime Run: jump over the holes.")
    p.add_argument("--seed", type=int, default=None,
                   help="Floor seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--assets", type=str, default=None,
                   help="Directory with run.png, jump.png, floor_normal.png, floor_cracked.png. "
                        "Omit to use generated placeholder art.")
    p.add_argument("--scale", type=int, default=WINDOW_SCALE, help="Integer window scale.")
    p.add_argument("--fps", type=int, default=FPS)
    p.add_argument("--touch", action="store_true", help="Show touch prompts (TAP).")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def resolve_seed(seed):
    # None -> SEED_DEFAULT; -1 -> random (FloorGen draws one)
    if seed is None:
        return SEED_DEFAULT
    if seed == -1:
        return None
    return seed


def handle_event(game, event) -> bool:
    """Route one pygame event; returns True when the player asked to quit."""
    if event.type == pygame.QUIT:
        return True
    if event.type == pygame.KEYDOWN:
        if event.key == K_ESCAPE:
            return True
        if event.key in JUMP_KEYS:
            game.record_jump_press()
    # SDL mirrors touches as mouse clicks; count the finger event only
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 \
            and not getattr(event, "touch", False):
        game.record_jump_press()
    if event.type == pygame.FINGERDOWN:
        game.record_jump_press()
    return False


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.display.set_caption("Hajime Run")
    window = pygame.display.set_mode((WIDTH * args.scale, HEIGHT * args.scale))
    clock = pygame.time.Clock()

    try:
        images = load_assets(args.assets) if args.assets else placeholder_assets()
    except AssetError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        pygame.quit()
        sys.exit(1)

    canvas = PygameCanvas()
    game = GameController(images, canvas=canvas, seed=resolve_seed(args.seed),
                          verb=prompt_verb(args.touch))
    logging.getLogger(__name__).info("floor seed %s", game.floor.seed)

    while True:
        dt = clock.tick(args.fps) / 1000.0
        if dt > DT_CLAMP:  # clamp stalls
            dt = DT_CLAMP

        for event in pygame.event.get():
            if handle_event(game, event):
                pygame.quit(); sys.exit()

        game.update(dt, pygame.time.get_ticks() / 1000.0)

        canvas.present(window)
        pygame.display.flip()


if __name__ == "__main__":
    run()
