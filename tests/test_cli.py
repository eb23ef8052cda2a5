# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

from flask.testing import FlaskCliRunner

from edutools import prompts
from edutools.params import CognitiveLevel, GenerationRequest, ToolMode


def test_prompt_command(runner: FlaskCliRunner) -> None:
    result = runner.invoke(args=[
        'prompt',
        '--mode', 'question_generator',
        '--subject', "Geography",
        '--grade', "Grade 10",
        '--topic', "Erosion",
        '--questions', '5',
        '--marks', '20',
    ])
    assert result.exit_code == 0

    req = GenerationRequest(subject="Geography", grade="Grade 10", topic="Erosion", mode=ToolMode.QUESTION_GENERATOR,
                            question_count=5, total_marks=20)
    assert result.output == prompts.make_main_prompt(req) + "\n"


def test_prompt_command_rewriter(runner: FlaskCliRunner) -> None:
    result = runner.invoke(args=[
        'prompt',
        '--mode', 'rewriter',
        '--subject', "Mechanical Technology",
        '--grade', "Grade 11",
        '--level', 'higher',
        '--notes', "State two safety rules.",
        '--check',
    ])
    assert result.exit_code == 0
    assert "State two safety rules." in result.output
    assert CognitiveLevel.HIGHER.value in result.output
    assert "[SUBJECT ENGINE: MECHANICAL TECHNOLOGY]" in result.output


def test_prompt_command_defaults(runner: FlaskCliRunner) -> None:
    result = runner.invoke(args=['prompt'])
    assert result.exit_code == 0
    assert "TOOL MODE: QUESTION GENERATOR" in result.output
    assert "Topic: Not specified." in result.output


def test_prompt_command_check_fails(runner: FlaskCliRunner) -> None:
    result = runner.invoke(args=['prompt', '--mode', 'rewriter', '--check'])
    assert result.exit_code == 1
    assert "Rewriter mode requires existing text" in result.output
    assert "TOOL MODE" not in result.output


def test_prompt_command_bad_mode(runner: FlaskCliRunner) -> None:
    result = runner.invoke(args=['prompt', '--mode', 'essay'])
    assert result.exit_code != 0


def test_prompt_command_negative_count(runner: FlaskCliRunner) -> None:
    result = runner.invoke(args=['prompt', '--questions', '-1'])
    assert result.exit_code != 0


def test_prompt_command_check_blank_notes(runner: FlaskCliRunner) -> None:
    result = runner.invoke(args=['prompt', '--mode', 'rewriter', '--notes', "   \n ", '--check'])
    assert result.exit_code == 1
    assert "Rewriter mode requires existing text" in result.output
