# --- Display ---
WIDTH = 720
HEIGHT = 720
FPS = 60

# --- Track ---
LANES = 3
TRACK_LENGTH = HEIGHT          # visible track length (px), obstacles pruned past it
GROUND_LINE_RATIO = 0.78       # player's fixed ground line, as a fraction of the track
TRACK_MAX_W = 540              # lane strip width cap (px)
TRACK_W_RATIO = 0.75           # lane strip width as a fraction of the window

# --- Speed / score ---
BASE_SPEED = 340.0             # scroll speed at multiplier 1 (px/s)
ACCEL_RATE = 0.035             # speed multiplier gained per second
SCORE_SCALE = 6.0              # px of scroll per point of distance

# --- Timing ---
MAX_DT = 0.033                 # clamp after stalls (s)

# --- Player ---
START_LANE = 1
GRAVITY = 1800.0               # px/s^2, pulls toward the ground (positive)
JUMP_VELOCITY = -850.0         # px/s, negative = up
LIFT_OFF_OFFSET = -1.0         # offset set on take-off so the jump registers at once
SLIDE_DURATION = 0.42          # s
PLAYER_SIZE = 44
SLIDE_SCALE = 0.6

# --- Obstacles / spawner ---
SPAWN_Y = -60.0                # just above the visible track
PRUNE_MARGIN = 20.0
BASE_SPAWN_INTERVAL_MS = 750.0
MIN_SPAWN_INTERVAL_MS = 380.0
SPAWN_DECAY_RATE = 0.5         # ms of interval lost per point of distance
ROCK_CHANCE = 0.65             # type roll below this -> rock
BAR_CHANCE = 0.88              # below this -> bar, otherwise wall pair

# --- Collision ---
COLLISION_BAND = 40.0
JUMP_CLEAR_THRESHOLD = -20.0   # vertical offset a jump must pass to clear a rock

# --- RNG ---
RNG_FALLBACK_STATE = 123456789
RNG_RESOLUTION = 1_000_000

# --- Controls ---
TOUCH_THRESHOLD_PX = 24
TAP_MAX_MS = 250
BUTTON_SIZE = 56               # on-screen control buttons (px)
BUTTON_GAP = 12
BUTTON_MARGIN = 16

# --- High score ---
HISCORE_FILE = "~/.lanerunner/hiscore.json"

# --- Colors (RGB) ---
COLOR_BG_TOP = (18, 26, 53)
COLOR_BG_BOTTOM = (11, 16, 32)
COLOR_LANE_DARK = (14, 22, 48)
COLOR_LANE = (22, 33, 67)
COLOR_DASH = (44, 54, 82)
COLOR_ACCENT = (119, 245, 168)
COLOR_ACCENT_2 = (102, 209, 255)
COLOR_DANGER = (255, 122, 122)
COLOR_ROCK = (185, 199, 255)
COLOR_BAR = (255, 217, 102)
COLOR_BAR_TRIM = (247, 183, 49)
COLOR_FG = (233, 237, 245)
COLOR_SHADOW = (0, 0, 0)
