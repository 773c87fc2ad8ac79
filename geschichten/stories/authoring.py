"""
Authoring Workflow

Turns one story form submission (story fields plus any number of quiz
questions, each with an optional audio file) into rows, atomically.

Question fields arrive flat, e.g. ``questions[3][prompt]`` or
``questions[3][answers][1]``. They are folded into partial records keyed by
question index, then materialized in index order.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import FileStorage

from geschichten.errors import NotFoundError, UnexpectedError, ValidationError
from geschichten.services import content
from geschichten.stories.uploads import PendingUploads, check_audio_files

logger = logging.getLogger(__name__)

ANSWER_COUNT = 4

QUESTION_FIELD_RE = re.compile(r'^questions\[(\d+)\]\[(prompt|correctIndex)\]$', re.ASCII)
ANSWER_FIELD_RE = re.compile(r'^questions\[(\d+)\]\[answers\]\[(\d+)\]$', re.ASCII)
AUDIO_FIELD_RE = re.compile(r'^questions\[(\d+)\]\[audio\]$', re.ASCII)


@dataclass
class StoryDraft:
    title: str
    level: str
    summary: str
    body: str


@dataclass
class QuestionDraft:
    index: int
    prompt: str
    answers: List[str] = field(default_factory=lambda: [''] * ANSWER_COUNT)
    correct_index: Optional[int] = 0
    audio: Optional[FileStorage] = None

    def is_blank(self):
        return not self.prompt and not any(self.answers)


def _parse_int(raw):
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def uploaded_files(files):
    """(field name, file) pairs for every file input that carried a file."""
    if not files:
        return []
    return [(name, file_storage) for name, file_storage in files.items(multi=True)
            if file_storage and file_storage.filename]


def _blank_partial():
    return {'prompt': '', 'answers': [''] * ANSWER_COUNT, 'correct_index': None, 'audio': None}


def collect_question_fields(form, files=None):
    """Group question fields and audio files by their embedded index.

    Values are kept as submitted. Names that do not match the patterns, or
    carry a non-numeric index, contribute nothing.
    """
    partials = {}

    for name, value in form.items():
        match = QUESTION_FIELD_RE.match(name)
        if match:
            partial = partials.setdefault(int(match.group(1)), _blank_partial())
            key = 'prompt' if match.group(2) == 'prompt' else 'correct_index'
            partial[key] = value
            continue

        match = ANSWER_FIELD_RE.match(name)
        if match:
            partial = partials.setdefault(int(match.group(1)), _blank_partial())
            answer_index = int(match.group(2))
            if answer_index < ANSWER_COUNT:
                partial['answers'][answer_index] = value

    for name, file_storage in uploaded_files(files):
        match = AUDIO_FIELD_RE.match(name)
        if match:
            partials.setdefault(int(match.group(1)), _blank_partial())['audio'] = file_storage

    return partials


def materialize_questions(partials):
    """Build trimmed drafts in index order, dropping fully blank rows."""
    drafts = []
    for index in sorted(partials):
        partial = partials[index]
        raw_correct = partial['correct_index']
        draft = QuestionDraft(
            index=index,
            prompt=(partial['prompt'] or '').strip(),
            answers=[(answer or '').strip() for answer in partial['answers']],
            # An unchecked radio group submits nothing: first answer
            correct_index=0 if raw_correct is None else _parse_int(raw_correct),
            audio=partial['audio'],
        )
        if not draft.is_blank():
            drafts.append(draft)
    return drafts


def validate_story(form):
    title = form.get('title', '').strip()
    level = form.get('level', '').strip().upper()
    summary = form.get('summary', '').strip()
    body = form.get('body', '').strip()

    if not title or not summary or not body:
        raise ValidationError('Please fill in all required fields.')
    if level not in current_app.config['STORY_LEVELS']:
        raise ValidationError('Please choose a valid level (A1–C2).')

    return StoryDraft(title=title, level=level, summary=summary, body=body)


def _valid_correct_index(value):
    return value is not None and 0 <= value < ANSWER_COUNT


def validate_question(draft):
    if not draft.prompt or not all(draft.answers):
        raise ValidationError('Each question must include a prompt and four answers.')
    if not _valid_correct_index(draft.correct_index):
        raise ValidationError('Select which answer is correct for each question.')


def story_form_values(form, partials=None):
    """The submitted story form, untrimmed, for redisplay."""
    if partials is None:
        partials = collect_question_fields(form)
    return {
        'title': form.get('title', ''),
        'level': form.get('level', ''),
        'summary': form.get('summary', ''),
        'body': form.get('body', ''),
        'questions': [
            {
                'index': index,
                'prompt': partials[index]['prompt'],
                'answers': list(partials[index]['answers']),
                'correct_index': _parse_int(partials[index]['correct_index']),
            }
            for index in sorted(partials)
        ],
    }


def _check_uploads(file_storages):
    config = current_app.config
    check_audio_files(file_storages, config['ALLOWED_AUDIO_EXTENSIONS'], config['MAX_AUDIO_BYTES'])


def _pending_uploads():
    config = current_app.config
    return PendingUploads(config['AUDIO_UPLOAD_FOLDER'], config['AUDIO_URL_PREFIX'])


def submit_story(form, files, author_id):
    """Validate and persist a story with its questions; return the story id.

    Nothing is persisted and no upload survives unless every row commits.
    """
    _check_uploads([file_storage for _, file_storage in uploaded_files(files)])

    partials = collect_question_fields(form, files)
    story = validate_story(form)
    questions = materialize_questions(partials)
    for question in questions:
        validate_question(question)

    with _pending_uploads() as uploads:
        try:
            with content.transaction() as tx:
                story_id = content.insert_story({
                    'title': story.title,
                    'level': story.level,
                    'summary': story.summary,
                    'body': story.body,
                }, author_id, tx=tx)

                for question in questions:
                    audio_path = uploads.stage(question.audio) if question.audio else None
                    content.insert_question({
                        'story_id': story_id,
                        'prompt': question.prompt,
                        'answers': question.answers,
                        'correct_index': question.correct_index,
                        'audio_path': audio_path,
                    }, author_id, tx=tx)
        except (SQLAlchemyError, OSError) as exc:
            logger.exception('Could not save story %r', story.title)
            raise UnexpectedError('An unexpected error occurred while saving the story.') from exc
        uploads.keep()

    logger.info('Story %s saved with %d question(s)', story_id, len(questions))
    return story_id


# -----------------------------------------------------------------------------
# Single question attached to an existing story
# -----------------------------------------------------------------------------

def question_form_values(form):
    """The submitted question form, untrimmed, for redisplay."""
    answers = form.getlist('answers')[:ANSWER_COUNT]
    answers += [''] * (ANSWER_COUNT - len(answers))
    return {
        'story_id': _parse_int(form.get('storyId')),
        'prompt': form.get('prompt', ''),
        'answers': answers,
        'correct_index': _parse_int(form.get('correctIndex')),
    }


def submit_question(form, audio, author_id):
    """Validate and persist one question for an existing story; return its id."""
    if audio is not None and not audio.filename:
        audio = None
    _check_uploads([audio] if audio else [])

    values = question_form_values(form)
    story_id = values['story_id']
    prompt = values['prompt'].strip()
    answers = [answer.strip() for answer in values['answers']]
    correct_index = values['correct_index']

    if story_id is None or story_id <= 0:
        raise ValidationError('Please choose which story this question belongs to.')
    if not prompt:
        raise ValidationError('Please provide the question prompt.')
    if not all(answers):
        raise ValidationError('All four answer options are required.')
    if not _valid_correct_index(correct_index):
        raise ValidationError('Select which answer is correct.')
    if content.get_story(story_id) is None:
        raise NotFoundError('The selected story could not be found.')

    with _pending_uploads() as uploads:
        try:
            audio_path = uploads.stage(audio) if audio else None
            question_id = content.insert_question({
                'story_id': story_id,
                'prompt': prompt,
                'answers': answers,
                'correct_index': correct_index,
                'audio_path': audio_path,
            }, author_id)
        except (SQLAlchemyError, OSError) as exc:
            logger.exception('Could not save question for story %s', story_id)
            raise UnexpectedError('An unexpected error occurred while saving the question.') from exc
        uploads.keep()

    return question_id
