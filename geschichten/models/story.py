"""
Story and Question Models
"""

from datetime import datetime

from geschichten.extensions import db


class Story(db.Model):
    """A reading text at one CEFR level"""
    __tablename__ = 'stories'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    level = db.Column(db.String(2), nullable=False)
    summary = db.Column(db.Text, nullable=False)
    body = db.Column(db.Text, nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='RESTRICT'),
                          nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    author = db.relationship('User')
    questions = db.relationship('Question', backref='story', lazy=True,
                                order_by='Question.id',
                                cascade='all, delete-orphan', passive_deletes=True)

    __table_args__ = (
        db.CheckConstraint("level IN ('A1', 'A2', 'B1', 'B2', 'C1', 'C2')", name='ck_stories_level'),
    )

    def __repr__(self):
        return f'<Story {self.id} {self.title!r}>'


class Question(db.Model):
    """Multiple-choice comprehension question attached to a story"""
    __tablename__ = 'questions'

    id = db.Column(db.Integer, primary_key=True)
    story_id = db.Column(db.Integer, db.ForeignKey('stories.id', ondelete='CASCADE'),
                         nullable=False, index=True)
    prompt = db.Column(db.Text, nullable=False)
    answer_a = db.Column(db.String(255), nullable=False)
    answer_b = db.Column(db.String(255), nullable=False)
    answer_c = db.Column(db.String(255), nullable=False)
    answer_d = db.Column(db.String(255), nullable=False)
    correct_index = db.Column(db.Integer, nullable=False)
    audio_path = db.Column(db.String(255))  # relative to the static folder
    author_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='RESTRICT'),
                          nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint('correct_index BETWEEN 0 AND 3', name='ck_questions_correct_index'),
    )

    @property
    def answers(self):
        return [self.answer_a, self.answer_b, self.answer_c, self.answer_d]

    def __repr__(self):
        return f'<Question {self.id} Story:{self.story_id}>'
