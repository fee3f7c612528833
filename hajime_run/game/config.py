# --- Display (logical canvas) ---
WIDTH = 900
HEIGHT = 300
FPS = 60
DT_CLAMP = 1.0 / 30.0       # clamp stalls in the frame loop (sec)
WINDOW_SCALE = 1

# --- Difficulty ramp ---
SPEED_INC_START = 0.0       # run time before the ramp kicks in (sec)
SPEED_INC = 0.005           # time_scale gained per real second
SPEED_MAX = 4.0

# --- Floor belt ---
FLOOR_SPEED = 500.0         # belt speed (px/s), segments move toward +x
HOLE_PROB = 0.2             # gap probability at time_scale == 1
HOLE_PROB_MUL = 0.3         # extra gap probability per unit of time_scale
SEG_NORMAL_W = 200
SEG_GAP_W = 600
FLOOR_Y = 255
FLOOR_H = 60

# --- Collision ---
PLAYER_HIT_LEFT = 750       # fixed player hitbox span on x
PLAYER_HIT_RIGHT = 850
GAP_HIT_LEFT = 270          # lethal window inside a gap segment (local x)
GAP_HIT_RIGHT = 320

# --- Player ---
JUMP_FLOOR_FACTOR = 0.7     # belt slows while airborne
RUN_GRID = (4, 2)
RUN_FRAME_S = 0.1
JUMP_GRID = (4, 3)
JUMP_FRAME_S = 0.07
RUN_DST = (700, 80, 200, 200)
JUMP_DST = (570, 10, 332, 258)

# --- Score ---
SCORE_PER_S = 100.0
SCORE_DIGITS = 10

# --- Title / prompts ---
TITLE_TEXT = "HAJIME RUN!"
GAME_OVER_TEXT = "GAME OVER"
BLINK_PERIOD_S = 2.0
PROMPT_VERB_KEY = "Press SPACE"
PROMPT_VERB_TOUCH = "TAP"

# --- Fonts (size, family) ---
FONT_FAMILY = "couriernew"
FONT_TITLE = (40, FONT_FAMILY)
FONT_BIG = (50, FONT_FAMILY)
FONT_SMALL = (20, FONT_FAMILY)
FONT_SCORE = (30, FONT_FAMILY)

# --- Assets ---
ASSET_FILES = {
    "run": "run.png",
    "jump": "jump.png",
    "floor_normal": "floor_normal.png",
    "floor_cracked": "floor_cracked.png",
}

SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (175, 225, 227)
COLOR_FG = (255, 255, 255)
COLOR_RUNNER = (238, 122, 64)
COLOR_RUNNER_ALT = (200, 90, 50)
COLOR_FLOOR = (120, 92, 66)
COLOR_FLOOR_TOP = (92, 170, 80)
COLOR_CRACK = (40, 30, 24)
