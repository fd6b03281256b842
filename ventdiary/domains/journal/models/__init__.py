from ventdiary.domains.journal.models.journal_entry import BASE_CATEGORIES, JournalEntry

__all__ = ["BASE_CATEGORIES", "JournalEntry"]
