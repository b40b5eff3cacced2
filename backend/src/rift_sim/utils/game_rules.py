"""Balance tables shared by the scorers, the power model and the tick engine.

Values are tuned by hand against simulated LCK-style seasons. Class and role
keys use the canonical lowercase names from ``rift_sim.models``.
"""

# Champion score blend
SCORE_WEIGHTS = {"stats": 0.55, "meta": 0.25, "mastery": 0.20}

# Tier -> meta coefficient (tier 1 strongest)
META_COEFF = {1: 1.0, 2: 0.95, 3: 0.90, 4: 0.85, 5: 0.80}

# A mastery score at or above this lets a player treat a champion as up to
# two tiers stronger ("one trick" comfort)
OTP_SCORE_THRESHOLD = 80
OTP_TIER_BOOST = 2

DEFAULT_OVERALL = 85
MISSING_MASTERY_FACTOR = 0.8

# Per-minute power noise
POWER_VARIANCE = 0.06

# Applied to the named player team only
PLAYER_DIFFICULTY_MULTIPLIERS = {
    "easy": 1.1,
    "normal": 1.0,
    "hard": 0.95,
    "insane": 0.90,
}

POSITION_WEIGHTS = {
    "early": {"top": 0.25, "jungle": 0.30, "mid": 0.30, "bot": 0.10, "support": 0.05},
    "mid": {"top": 0.20, "jungle": 0.25, "mid": 0.25, "bot": 0.20, "support": 0.10},
    "late": {"top": 0.15, "jungle": 0.20, "mid": 0.25, "bot": 0.30, "support": 0.10},
}

PHASE_STAT_WEIGHTS = {
    "early": {"laning": 0.45, "mechanics": 0.30, "growth": 0.15, "stability": 0.10, "macro": 0.0, "teamfight": 0.0},
    "mid": {"macro": 0.35, "growth": 0.25, "mechanics": 0.20, "stability": 0.10, "teamfight": 0.10, "laning": 0.0},
    "late": {"teamfight": 0.45, "stability": 0.25, "mechanics": 0.20, "macro": 0.10, "laning": 0.0, "growth": 0.0},
}

DEFAULT_CLASS_BY_ROLE = {
    "top": "fighter",
    "jungle": "fighter",
    "mid": "mage",
    "bot": "marksman",
    "support": "support",
}

DRAGON_TYPES = ["infernal", "mountain", "cloud", "ocean", "hextech", "chemtech"]

# Per-stack bonus by champion class
DRAGON_BUFFS = {
    "infernal": {"marksman": 0.03, "mage": 0.03, "fighter": 0.05, "tank": 0.01, "support": 0.01, "assassin": 0.01},
    "mountain": {"tank": 0.03, "fighter": 0.02, "support": 0.02, "marksman": 0.01, "mage": 0.01, "assassin": 0.01},
    "cloud": {"assassin": 0.04, "tank": 0.02, "support": 0.02, "fighter": 0.01, "marksman": 0.05, "mage": 0.05},
    "ocean": {"tank": 0.03, "fighter": 0.03, "mage": 0.015, "support": 0.015, "assassin": 0.01, "marksman": 0.01},
    "hextech": {"marksman": 0.03, "mage": 0.02, "assassin": 0.015, "fighter": 0.015, "tank": 0.01, "support": 0.01},
    "chemtech": {"fighter": 0.04, "tank": 0.03, "support": 0.02, "assassin": 0.01, "marksman": 0.01, "mage": 0.01},
}

DRAGON_SOULS = {
    "infernal": {"marksman": 0.25, "mage": 0.25, "assassin": 0.22, "fighter": 0.15, "tank": 0.08, "support": 0.08},
    "mountain": {"tank": 0.25, "fighter": 0.22, "marksman": 0.15, "mage": 0.15, "assassin": 0.12, "support": 0.10},
    "cloud": {"fighter": 0.22, "tank": 0.22, "assassin": 0.20, "support": 0.15, "marksman": 0.12, "mage": 0.12},
    "ocean": {"fighter": 0.25, "tank": 0.25, "mage": 0.18, "marksman": 0.15, "support": 0.10, "assassin": 0.05},
    "hextech": {"marksman": 0.24, "mage": 0.20, "fighter": 0.20, "tank": 0.15, "assassin": 0.15, "support": 0.10},
    "chemtech": {"fighter": 0.28, "tank": 0.22, "assassin": 0.15, "marksman": 0.10, "mage": 0.10, "support": 0.10},
}

OBJECTIVES = {
    "grubs": {"minute": 7, "count": 3, "gold": 300},
    "herald": {"minute": 15, "gold": 300},
    "dragon": {"initial_spawn": 5, "respawn": 5, "gold": 100, "soul_at": 4},
    "baron": {"spawn": 20, "respawn": 5, "duration": 3, "gold": 1500, "combat_bonus": 1.3, "contest_factor": 0.9},
    "elder": {"spawn_after_soul": 6, "respawn": 6, "duration": 3, "combat_bonus": 1.6},
    "plates": {"start_minute": 4, "end_minute": 14, "count": 6},
}

GOLD = {
    "start": 500,
    "kill": 300,
    "assist": 150,
    "comeback_deficit": 5000,
    "comeback_bonus": 1.15,
    "outer_plate": {"local": 250, "team": 50},
    "outer_turret": {"local": 300, "team": 50},
    "inner_mid": {"local": 425, "team": 25},
    "inner_side": {"local": 675, "team": 25},
    "inhib_turret": {"local": 375, "team": 25},
    "inhibitor": {"team": 10},
}

BASE_XPM = {"top": 400, "jungle": 360, "mid": 400, "bot": 360, "support": 240}
BASE_GPM = {"top": 320, "jungle": 280, "mid": 330, "bot": 360, "support": 200}

MAX_LEVEL = 18
TOP_LEVEL_BONUS_CAP = 20

# Kill / assist selection weights by role
KILL_WEIGHTS = {"bot": 40, "mid": 35, "top": 20, "jungle": 15, "support": 2}
ASSIST_WEIGHTS = {"support": 50, "jungle": 30, "mid": 15, "top": 10, "bot": 5}

LANES = ["top", "mid", "bot"]
# Which lineup role collects local turret gold in each lane
LANE_OWNER = {"top": "top", "mid": "mid", "bot": "bot"}

HARD_MINUTE_CAP = 70
