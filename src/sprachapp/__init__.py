"""SprachApp: spaced-repetition flashcards for language learners."""

from sprachapp.consts import VERSION

__version__ = VERSION
