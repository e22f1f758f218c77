"""
Battle constants.

Tunable numbers of the battle core.
"""

# ==================== Turn scheduling ====================

# Action bar value a combatant must reach to act
ACTION_THRESHOLD = 1000

# Turns simulated ahead of the current one
LOOKAHEAD_TURNS = 20

# Turns exposed to the presentation layer
DISPLAY_QUEUE_SIZE = 6

# ==================== Teams & attacks ====================

TEAM_SIZE = 3

# Splash attacks deal this fraction of single-target damage
SPLASH_DAMAGE_MULTIPLIER = 0.5

# Maximum number of opponents a splash attack can hit
SPLASH_TARGET_CAP = 3

# ==================== Presentation timing (seconds) ====================

AI_THINK_TIME = 2.0
TURN_TRANSITION_TIME = 2.5

# Entries kept in the rolling battle log
BATTLE_LOG_SIZE = 10
