"""
Content Repository

Read and write access to stories, questions, vocabulary and grammar topics.
Listings are newest first (created_at, then id, both descending).

Every write accepts an optional ``tx`` session. With ``tx`` the row is only
flushed so the caller can batch several writes and commit once; without it
the write commits on its own.
"""

import logging
from collections import namedtuple
from contextlib import contextmanager

from geschichten.extensions import db
from geschichten.models import Story, Question, VocabularyEntry, GrammarTopic

logger = logging.getLogger(__name__)

AdjacentStories = namedtuple('AdjacentStories', ['prev_story', 'next_story'])


@contextmanager
def transaction():
    """Yield the session; commit on success, roll back on any exception."""
    session = db.session
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def _save(row, tx):
    if tx is not None:
        tx.add(row)
        tx.flush()
        return row.id

    with transaction() as session:
        session.add(row)
    return row.id


# -----------------------------------------------------------------------------
# Reads
# -----------------------------------------------------------------------------

def list_stories():
    return Story.query.order_by(Story.created_at.desc(), Story.id.desc()).all()


def list_story_summaries():
    """Id and title of every story, for selection widgets."""
    return db.session.query(Story.id, Story.title)\
        .order_by(Story.created_at.desc(), Story.id.desc()).all()


def get_story(story_id):
    return db.session.get(Story, story_id)


def get_adjacent_stories(story_id):
    """Nearest lower and higher story by id (not by date or level)."""
    prev_story = db.session.query(Story.id, Story.title)\
        .filter(Story.id < story_id).order_by(Story.id.desc()).first()
    next_story = db.session.query(Story.id, Story.title)\
        .filter(Story.id > story_id).order_by(Story.id.asc()).first()
    return AdjacentStories(prev_story, next_story)


def list_questions(story_id):
    # Quiz order is insertion order
    return Question.query.filter_by(story_id=story_id).order_by(Question.id.asc()).all()


def list_vocabulary():
    return VocabularyEntry.query\
        .order_by(VocabularyEntry.created_at.desc(), VocabularyEntry.id.desc()).all()


def list_grammar_topics():
    return GrammarTopic.query\
        .order_by(GrammarTopic.created_at.desc(), GrammarTopic.id.desc()).all()


# -----------------------------------------------------------------------------
# Writes
# -----------------------------------------------------------------------------

def insert_story(fields, author_id, tx=None):
    story = Story(
        title=fields['title'],
        level=fields['level'],
        summary=fields['summary'],
        body=fields['body'],
        author_id=author_id,
    )
    story_id = _save(story, tx)
    logger.info('Inserted story %s', story_id)
    return story_id


def insert_question(fields, author_id, tx=None):
    answers = fields['answers']
    question = Question(
        story_id=fields['story_id'],
        prompt=fields['prompt'],
        answer_a=answers[0],
        answer_b=answers[1],
        answer_c=answers[2],
        answer_d=answers[3],
        correct_index=fields['correct_index'],
        audio_path=fields.get('audio_path'),
        author_id=author_id,
    )
    question_id = _save(question, tx)
    logger.info('Inserted question %s for story %s', question_id, fields['story_id'])
    return question_id


def insert_vocabulary_entry(fields, author_id, tx=None):
    entry = VocabularyEntry(
        term=fields['term'],
        translation=fields['translation'],
        example_sentence=fields.get('example_sentence') or None,
        author_id=author_id,
    )
    entry_id = _save(entry, tx)
    logger.info('Inserted vocabulary entry %s', entry_id)
    return entry_id


def insert_grammar_topic(fields, author_id, tx=None):
    topic = GrammarTopic(
        title=fields['title'],
        explanation=fields['explanation'],
        author_id=author_id,
    )
    topic_id = _save(topic, tx)
    logger.info('Inserted grammar topic %s', topic_id)
    return topic_id
