"""
Configuration for the collector game, its environment wrapper and evaluation runs
"""

# Core session parameters (milliseconds / world units)
SESSION_CONFIG = {
    "width": 800,
    "height": 600,
    "collectible_spawn_ms": 2000.0,
    "enemy_spawn_ms": 3000.0,
}

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # headless by default, "human" opens the Arcade window
    **SESSION_CONFIG,
    "frame_ms": 1000 / 60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 5,
    "m_collectibles": 3,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "R_POINTS": 0.01,    # Per point scored (a common pickup is 10 points)
    "R_DAMAGE": 0.05,    # Per point of health lost
    "R_TIME": 0.001,     # Small time penalty
    "R_DEATH": 5.0,      # Game over penalty
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "n_episodes": 10,
    "seed": 42,
    "baseline_policy": "random",  # what --compare-random measures against
}


if __name__ == "__main__":
    for name, cfg in [("session", SESSION_CONFIG), ("env", ENV_CONFIG),
                      ("reward", REWARD_CONFIG), ("eval", EVAL_CONFIG)]:
        print(f"[{name}]")
        for key, value in cfg.items():
            print(f"  {key:22} = {value}")
