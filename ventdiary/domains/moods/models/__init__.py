from ventdiary.domains.moods.models.mood import Mood, MoodType

__all__ = ["Mood", "MoodType"]
