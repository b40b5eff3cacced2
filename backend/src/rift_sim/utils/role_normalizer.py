"""Centralized role normalization utility.

All role normalization in the codebase should use this module to ensure
consistency. The canonical format is lowercase: top, jungle, mid, bot, support.
Roster files in the wild use TOP/JGL/MID/ADC/SUP (and SPT for support), so every
boundary that reads a role passes it through ``normalize_role`` first.
"""

from typing import Optional

# Canonical roles - the standard format used throughout the application
CANONICAL_ROLES = frozenset({"top", "jungle", "mid", "bot", "support"})

# Comprehensive mapping from any known role format to canonical lowercase
ROLE_ALIASES: dict[str, str] = {
    # Top lane variations
    "top": "top",
    "top laner": "top",
    "toplane": "top",

    # Jungle variations
    "jungle": "jungle",
    "jungler": "jungle",
    "jgl": "jungle",
    "jng": "jungle",
    "jg": "jungle",

    # Mid lane variations
    "mid": "mid",
    "middle": "mid",
    "mid laner": "mid",

    # Bot/ADC variations - all normalize to "bot"
    "bot": "bot",
    "adc": "bot",
    "bottom": "bot",
    "ad carry": "bot",
    "marksman": "bot",

    # Support variations
    "support": "support",
    "sup": "support",
    "spt": "support",
    "supp": "support",
}

# Role ordering for lineups, logs and display
ROLE_ORDER = ["top", "jungle", "mid", "bot", "support"]

# Short labels used in rendered log lines
ROLE_LABELS = {
    "top": "TOP",
    "jungle": "JGL",
    "mid": "MID",
    "bot": "ADC",
    "support": "SUP",
}


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Normalize a role string to canonical lowercase format.

    Args:
        role: Role string in any known format (e.g., "JGL", "jungle", "ADC", "bot")

    Returns:
        Normalized role string (top/jungle/mid/bot/support) or None if invalid/None

    Examples:
        >>> normalize_role("JGL")
        'jungle'
        >>> normalize_role("ADC")
        'bot'
        >>> normalize_role("SPT")
        'support'
    """
    if role is None:
        return None
    return ROLE_ALIASES.get(role.strip().lower())


def normalize_role_strict(role: str) -> str:
    """Normalize a role string, raising ValueError if unknown."""
    normalized = normalize_role(role)
    if normalized is None:
        raise ValueError(f"Unknown role: {role}")
    return normalized


def role_label(role: str) -> str:
    """Short uppercase label for a canonical role (e.g. 'jungle' -> 'JGL')."""
    return ROLE_LABELS.get(role, role.upper())


def role_index(role: Optional[str]) -> int:
    """Position of a role in ROLE_ORDER; unknown roles sort last."""
    normalized = normalize_role(role)
    return ROLE_ORDER.index(normalized) if normalized else 99
