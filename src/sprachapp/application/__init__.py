# Application Package
from .cards import create_card, due_cards, next_due_card
from .ledger import advance_streak, record_review
from .pack_loader import load_pack
from .scheduler import schedule
from .study_service import answer_card, apply_pack, new_app_data, switch_language

__all__ = [
    "create_card",
    "due_cards",
    "next_due_card",
    "schedule",
    "load_pack",
    "record_review",
    "advance_streak",
    "new_app_data",
    "answer_card",
    "apply_pack",
    "switch_language",
]
