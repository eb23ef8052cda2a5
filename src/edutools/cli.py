# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

import sys

import click
from flask import Flask

from . import prompts
from .params import (
    DEFAULT_GRADE,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_TOTAL_MARKS,
    SUBJECTS,
    CognitiveLevel,
    GenerationRequest,
    MissingFieldError,
    ToolMode,
    check_required_fields,
    clean_notes,
)

_MODE_NAMES = [m.name.lower() for m in ToolMode]
_LEVEL_NAMES = [lvl.name.lower() for lvl in CognitiveLevel]


@click.command('prompt')
@click.option('--mode', type=click.Choice(_MODE_NAMES), default='question_generator', show_default=True)
@click.option('--subject', default=SUBJECTS[0], show_default=True)
@click.option('--grade', default=DEFAULT_GRADE, show_default=True)
@click.option('--topic', default='')
@click.option('--sub-topic', default=None)
@click.option('--level', type=click.Choice(_LEVEL_NAMES), default='mixed', show_default=True, help="Cognitive level.")
@click.option('--questions', type=click.IntRange(min=0), default=DEFAULT_QUESTION_COUNT, show_default=True)
@click.option('--marks', type=click.IntRange(min=0), default=DEFAULT_TOTAL_MARKS, show_default=True)
@click.option('--notes', default=None, help="Contextual input: questions for a memorandum or text to rewrite.")
@click.option('--check', is_flag=True, help="Reject the request if it lacks fields its mode requires.")
def prompt_command(mode: str, subject: str, grade: str, topic: str, sub_topic: str | None, level: str,
                   questions: int, marks: int, notes: str | None, check: bool) -> None:
    """Print the generation prompt for the given options (no LLM request is made)."""
    req = GenerationRequest(
        subject=subject,
        grade=grade,
        topic=topic.strip(),
        sub_topic=sub_topic,
        mode=ToolMode[mode.upper()],
        cognitive_level=CognitiveLevel[level.upper()],
        question_count=questions,
        total_marks=marks,
        additional_notes=clean_notes(notes),
    )

    if check:
        try:
            check_required_fields(req)
        except MissingFieldError as e:
            click.secho(f"Error: {e}", fg='red', err=True)
            sys.exit(1)

    click.echo(prompts.make_main_prompt(req))


def init_app(app: Flask) -> None:
    app.cli.add_command(prompt_command)
