"""
Story Routes

Reading stories and authoring them with their quiz questions.
"""

from flask import render_template, request, redirect, url_for
from flask_login import current_user

from geschichten.auth.decorators import admin_required, login_required
from geschichten.errors import GeschichtenError, NotFoundError
from geschichten.services import content
from geschichten.stories import stories_bp
from geschichten.stories import authoring


def _empty_story_values():
    return {'title': '', 'level': 'A1', 'summary': '', 'body': '', 'questions': []}


def _empty_question_values(stories):
    return {
        'story_id': stories[0].id if stories else None,
        'prompt': '',
        'answers': [''] * authoring.ANSWER_COUNT,
        'correct_index': 0,
    }


@stories_bp.route('/')
def index():
    """List all stories, newest first"""
    return render_template('home.html', stories=content.list_stories())


@stories_bp.route('/about')
def about():
    return render_template('about.html')


@stories_bp.route('/story/<int:story_id>')
@login_required
def story_detail(story_id):
    """Story text with prev/next navigation and its quiz"""
    story = content.get_story(story_id)
    if story is None:
        raise NotFoundError()

    adjacent = content.get_adjacent_stories(story_id)
    return render_template('story.html',
                           story=story,
                           prev_story=adjacent.prev_story,
                           next_story=adjacent.next_story,
                           questions=content.list_questions(story_id))


@stories_bp.route('/stories/new')
@admin_required
def new_story():
    return render_template('stories/new.html', error=None, values=_empty_story_values())


@stories_bp.route('/stories', methods=['POST'])
@admin_required
def create_story():
    """Save a story and all of its questions in one transaction"""
    try:
        story_id = authoring.submit_story(request.form, request.files, current_user.id)
    except GeschichtenError as exc:
        values = authoring.story_form_values(request.form)
        return render_template('stories/new.html', error=exc.message, values=values), exc.status_code

    return redirect(url_for('stories.story_detail', story_id=story_id))


@stories_bp.route('/questions/new')
@admin_required
def new_question():
    stories = content.list_story_summaries()
    created_id = request.args.get('created', type=int)
    success = f'Question #{created_id} saved successfully.' if created_id is not None else None
    return render_template('questions/new.html',
                           error=None,
                           success=success,
                           stories=stories,
                           values=_empty_question_values(stories))


@stories_bp.route('/questions', methods=['POST'])
@admin_required
def create_question():
    """Attach one question to an existing story"""
    try:
        question_id = authoring.submit_question(request.form, request.files.get('audio'),
                                                current_user.id)
    except GeschichtenError as exc:
        return render_template('questions/new.html',
                               error=exc.message,
                               success=None,
                               stories=content.list_story_summaries(),
                               values=authoring.question_form_values(request.form)), exc.status_code

    return redirect(url_for('stories.new_question', created=question_id))
