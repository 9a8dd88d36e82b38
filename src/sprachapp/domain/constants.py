"""Centralized constants for the SprachApp core.

All scheduling and ledger numbers live here so every layer
imports from a single source of truth.
"""

# ---------- Time ----------
MS_PER_DAY = 86_400_000

# ---------- Scheduler ----------
EASE_MIN = 1.3
EASE_MAX = 2.8
EASE_START = 2.0
EASE_BONUS = 0.1  # added on a correct answer
EASE_PENALTY = 0.2  # subtracted on a wrong answer
RELEARN_INTERVAL_DAYS = 0.1
RELEARN_DELAY_MS = MS_PER_DAY // 10  # ~2.4 hours

# ---------- Ledger ----------
XP_CORRECT = 10
XP_WRONG = 2
XP_PER_LEVEL = 100
DEFAULT_DAILY_GOAL = 10

# ---------- Pack download simulation ----------
DOWNLOAD_STEP_PERCENT = 5
DOWNLOAD_STEP_DELAY = 0.08  # seconds
