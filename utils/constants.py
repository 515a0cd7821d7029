# =========================
# MODEL
# =========================
MODEL_INPUT_SIZE = (512, 512)   # (width, height) fed to the detector
DETECTION_FIELDS = 6            # x1, y1, x2, y2, score, class_id

# =========================
# POST-PROCESSING
# =========================
SCORE_THRESHOLD = 0.85   # minimum score to draw a box / accept an observation
IOU_THRESHOLD   = 0.5    # overlap above this suppresses the weaker box

# =========================
# TICK (letter commit cadence)
# =========================
TICK_STEP_SECONDS  = 0.5   # one slider step
TICK_MIN_STEPS     = 1
TICK_MAX_STEPS     = 10
TICK_DEFAULT_STEPS = 4

TICK_MIN_PERIOD     = TICK_MIN_STEPS * TICK_STEP_SECONDS       # 0.5 s
TICK_MAX_PERIOD     = TICK_MAX_STEPS * TICK_STEP_SECONDS       # 5.0 s
TICK_DEFAULT_PERIOD = TICK_DEFAULT_STEPS * TICK_STEP_SECONDS   # 2.0 s

# =========================
# CAMERA
# =========================
FPS_LIMIT = 30
