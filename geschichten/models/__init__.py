"""
Models Package

Exports all models for easy importing.
"""

from geschichten.models.user import User
from geschichten.models.story import Story, Question
from geschichten.models.learning import VocabularyEntry, GrammarTopic

__all__ = ['User', 'Story', 'Question', 'VocabularyEntry', 'GrammarTopic']
