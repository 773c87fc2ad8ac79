"""
Learning Routes

Public listings of vocabulary and grammar topics; admin-only forms to add them.
"""

from flask import render_template, request
from flask_login import current_user

from geschichten.auth.decorators import admin_required
from geschichten.errors import ValidationError
from geschichten.learning import learning_bp
from geschichten.services import content

EMPTY_VOCABULARY = {'term': '', 'translation': '', 'exampleSentence': ''}
EMPTY_GRAMMAR = {'title': '', 'explanation': ''}


@learning_bp.route('/vocabulary')
def vocabulary():
    return render_template('learning/vocabulary.html', entries=content.list_vocabulary())


@learning_bp.route('/grammar')
def grammar():
    return render_template('learning/grammar.html', topics=content.list_grammar_topics())


@learning_bp.route('/vocabulary/new')
@admin_required
def new_vocabulary():
    return render_template('learning/vocabulary_new.html',
                           error=None, success=None, values=dict(EMPTY_VOCABULARY))


@learning_bp.route('/vocabulary', methods=['POST'])
@admin_required
def create_vocabulary():
    """Add a vocabulary entry"""
    values = {
        'term': request.form.get('term', ''),
        'translation': request.form.get('translation', ''),
        'exampleSentence': request.form.get('exampleSentence', ''),
    }
    fields = {
        'term': values['term'].strip(),
        'translation': values['translation'].strip(),
        'example_sentence': values['exampleSentence'].strip(),
    }

    if not fields['term'] or not fields['translation']:
        error = ValidationError('Please provide both the German term and its translation.')
        return render_template('learning/vocabulary_new.html',
                               error=error.message, success=None, values=values), error.status_code

    content.insert_vocabulary_entry(fields, current_user.id)
    return render_template('learning/vocabulary_new.html',
                           error=None,
                           success='Vocabulary entry saved successfully.',
                           values=dict(EMPTY_VOCABULARY))


@learning_bp.route('/grammar/new')
@admin_required
def new_grammar():
    return render_template('learning/grammar_new.html',
                           error=None, success=None, values=dict(EMPTY_GRAMMAR))


@learning_bp.route('/grammar', methods=['POST'])
@admin_required
def create_grammar():
    """Add a grammar topic"""
    values = {
        'title': request.form.get('title', ''),
        'explanation': request.form.get('explanation', ''),
    }
    fields = {key: value.strip() for key, value in values.items()}

    if not fields['title'] or not fields['explanation']:
        error = ValidationError('Please provide a title and explanation for the grammar topic.')
        return render_template('learning/grammar_new.html',
                               error=error.message, success=None, values=values), error.status_code

    content.insert_grammar_topic(fields, current_user.id)
    return render_template('learning/grammar_new.html',
                           error=None,
                           success='Grammar topic saved successfully.',
                           values=dict(EMPTY_GRAMMAR))
