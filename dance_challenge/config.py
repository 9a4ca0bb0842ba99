"""Central configuration for Dance Challenge."""

from pathlib import Path

# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------
WIDTH, HEIGHT = 640, 480
DISPLAY_FPS_CAP = 60
WINDOW_TITLE = "Dance Challenge"

# ---------------------------------------------------------------------------
# Camera
# ---------------------------------------------------------------------------
CAMERA_INDEX = 0
CAMERA_WARMUP_READS = 5         # frames to try before declaring the camera dead

# ---------------------------------------------------------------------------
# Pose detection (MediaPipe)
# ---------------------------------------------------------------------------
DETECTION_CONFIDENCE = 0.5
TRACKING_CONFIDENCE = 0.5
MODEL_COMPLEXITY = 1

# ---------------------------------------------------------------------------
# Body parts
# ---------------------------------------------------------------------------
PART_NAMES = [
    "nose",
    "leftEye",
    "rightEye",
    "leftEar",
    "rightEar",
    "leftShoulder",
    "rightShoulder",
    "leftElbow",
    "rightElbow",
    "leftWrist",
    "rightWrist",
    "leftHip",
    "rightHip",
    "leftKnee",
    "rightKnee",
    "leftAnkle",
    "rightAnkle",
]

# Shoulders, elbows, wrists and hips: the 8 trackable upper-body parts
CORE_PARTS = range(5, 13)

# Anatomically adjacent parts, drawn as bones
ADJACENT_PAIRS = [
    ("leftHip", "leftShoulder"),
    ("leftElbow", "leftShoulder"),
    ("leftElbow", "leftWrist"),
    ("leftHip", "leftKnee"),
    ("leftKnee", "leftAnkle"),
    ("rightHip", "rightShoulder"),
    ("rightElbow", "rightShoulder"),
    ("rightElbow", "rightWrist"),
    ("rightHip", "rightKnee"),
    ("rightKnee", "rightAnkle"),
    ("leftShoulder", "rightShoulder"),
    ("leftHip", "rightHip"),
]

SHOULDER_PAIR = ("rightShoulder", "leftShoulder")

# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------
MIN_PART_CONFIDENCE = 0.2
MATCH_TOLERANCE_PX = 50.0

# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
MATCH_THRESHOLD = 4             # half of the 8 core parts
NEAR_SUCCESS_MATCHES = 4        # above this the target snaps toward the player
BONUS_WINDOW = 2                # consecutive positive rounds for a streak bonus
BONUS_MIN_ROUNDS = 3            # no bonus before this many rounds are scored

# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------
TICK_PERIOD_MS = 100
ROUND_TICKS = 10                # one round lasts 10 ticks (1 s)
SCORING_TICK = 9
COUNTDOWN_CAP_MS = 1000 - TICK_PERIOD_MS
COUNTDOWN_CYCLE_MS = 60 * TICK_PERIOD_MS
CALIBRATE_SETUP_SECONDS = 5     # delay before calibration and music start

# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------
RECORD_INTERVAL_SECONDS = ROUND_TICKS * TICK_PERIOD_MS / 1000.0

# ---------------------------------------------------------------------------
# Colours (RGB, pygame order)
# ---------------------------------------------------------------------------
COLOR_POSITIVE = (153, 199, 167)
COLOR_AVERAGE = (178, 142, 27)
COLOR_NEGATIVE = (209, 66, 66)
COLOR_NEUTRAL_STATUS = (95, 166, 183)
COLOR_LIVE = (209, 66, 66, 51)  # translucent red
COLOR_SKIN = (141, 85, 36)
COLOR_JOINT = (224, 172, 105)
COLOR_BONE = (255, 219, 172)
COLOR_WHITE = (255, 255, 255)
COLOR_BLACK = (0, 0, 0)
COLOR_RECORDING = (220, 30, 30)

JOINT_RADIUS = 7.5
LIMB_MINOR_RADIUS = 10.0

# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------
PACKAGE_DIR = Path(__file__).resolve().parent
DANCES_DIR = PACKAGE_DIR / "dances"
SONG_PATH = PACKAGE_DIR / "assets" / "dancing_queen.ogg"
FONT_PATH = PACKAGE_DIR / "assets" / "PressStart2P.ttf"
