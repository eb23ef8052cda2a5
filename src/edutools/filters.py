# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

import re

from flask import Flask
from markdown_it import MarkdownIt
from markupsafe import Markup

# js-default: https://markdown-it-py.readthedocs.io/en/latest/security.html
_markdown_processor = MarkdownIt("js-default")

_question_re = re.compile(r"^\d+\.")


def _inline_markdown(text: str) -> Markup:
    html = _markdown_processor.renderInline(text)
    # relying on MarkdownIt's escaping (w/o HTML parsing, due to "js-default"), so mark this as safe
    return Markup(html)  # noqa: S704


def fmt_generated(value: str) -> Markup:
    '''Format generated assessment text for display and printing.

    Each line is one block:
      "# "     -> document title
      "## "    -> section heading
      "N."     -> question line
      other    -> paragraph
    Blank lines are dropped.  Inline Markdown within a line is rendered.
    '''
    blocks = []
    for line in value.splitlines():
        if not line.strip():
            continue
        if line.startswith('# '):
            blocks.append(Markup(
                "<div class='generated-title'><h1 class='title has-text-centered'>{}</h1>"
                "<p class='has-text-centered is-size-7 has-text-grey'>Official Assessment Documentation</p></div>"
            ).format(_inline_markdown(line[2:])))
        elif line.startswith('## '):
            blocks.append(Markup("<h2 class='subtitle generated-section'>{}</h2>").format(_inline_markdown(line[3:])))
        elif _question_re.match(line):
            blocks.append(Markup("<div class='generated-question'>{}</div>").format(_inline_markdown(line)))
        else:
            blocks.append(Markup("<p>{}</p>").format(_inline_markdown(line)))

    return Markup("\n").join(blocks)


def init_app(app: Flask) -> None:
    app.jinja_env.filters['fmt_generated'] = fmt_generated
