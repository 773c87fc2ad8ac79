"""
Vocabulary and Grammar Models
"""

from datetime import datetime

from geschichten.extensions import db


class VocabularyEntry(db.Model):
    """A German term with its translation"""
    __tablename__ = 'vocabulary_entries'

    id = db.Column(db.Integer, primary_key=True)
    term = db.Column(db.String(255), nullable=False)
    translation = db.Column(db.String(255), nullable=False)
    example_sentence = db.Column(db.Text)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='RESTRICT'),
                          nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f'<VocabularyEntry {self.term}>'


class GrammarTopic(db.Model):
    """Grammar note; the explanation is admin-authored HTML"""
    __tablename__ = 'grammar_topics'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    explanation = db.Column(db.Text, nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='RESTRICT'),
                          nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f'<GrammarTopic {self.title}>'
