"""
Configuration for the bugs game, its environment and bot evaluation
"""

# Interactive game parameters
GAME_CONFIG = {
    "mode": "autonomous",   # "manual" (arrow keys) or "autonomous" (bot)
    "width": 800,
    "height": 600,
    "tick_rate": 30,        # fixed updates per second
    "max_steps_per_frame": 5,
    "player_speed": 5.0,
    "horizon": 3,           # bot lookahead ticks, index 0 is the wait check
    "log_level": "INFO",
}

# Environment parameters
ENV_CONFIG = {
    "width": 800,
    "height": 600,
    "max_steps": 9000,  # 5 minutes at 30 ticks/s
    "k_bugs": 5,
    "player_speed": 5.0,
}

# ==============================================================================
# REWARD CONFIGURATION
# ==============================================================================

REWARD_CONFIG = {
    "R_SCORE": 1.0,     # Reward for capturing the score target
    "R_DEATH": 5.0,     # Penalty for touching a bug
    "R_TIME": 0.001,    # Small time penalty
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "n_episodes": 20,
    "seed": 42,
    "log_dir": "./logs/eval",
}
