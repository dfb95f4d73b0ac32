BOARD_SIZE = 8

# Gem palette colors used by the renderer, keyed by GemType value.
GEM_COLORS = {
    'red':    (220, 60, 70),     # #DC3C46
    'blue':   (60, 120, 220),    # #3C78DC
    'green':  (70, 180, 90),     # #46B45A
    'yellow': (235, 200, 60),    # #EBC83C
    'purple': (150, 80, 200),    # #9650C8
    'orange': (240, 140, 50),    # #F08C32
}

# Session countdown budget in seconds.
INITIAL_TIME = 60

# Cascade pacing (seconds). Presentation only; the final state does not depend on them.
MATCH_HIGHLIGHT_DELAY = 0.3
MATCH_REMOVAL_DELAY = 0.1
CASCADE_SETTLE_DELAY = 0.4
INVALID_SWAP_REVERT_DELAY = 0.3

# Board construction gives up avoiding a pre-existing run after this many draws for one cell.
MAX_PLACEMENT_ATTEMPTS = 50
# Random permutations tried by shuffle before the match-breaking repair pass.
MAX_SHUFFLE_ATTEMPTS = 100

# Number of entries kept by the leaderboard store.
LEADERBOARD_SIZE = 10

# Layout: cells shrink to fit the window width minus this padding, capped at MAX_CELL_SIZE.
BOARD_HORIZONTAL_PADDING = 32
MAX_CELL_SIZE = 60
MIN_CELL_SIZE = 20
CELL_GAP = 4
BOTTOM_MARGIN = 80
HUD_HEIGHT = 110
