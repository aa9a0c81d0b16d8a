"""
Inline formatting helpers shared by the image and PDF layouts.

``*bold*`` toggles are read by a small tokenizer instead of a regex
substitution: an asterisk opens a bold run only when a later asterisk closes
it with at least one other character in between. Anything else is literal.
"""

import re
from dataclasses import dataclass
from typing import List

BULLET = "\u2022"
BOLD_MARK = "*"

_CJK_RE = re.compile(r"[\u4e00-\u9fff]")
_BULLET_JOINER_RE = re.compile(r"\u2022\u2060\s*")
_ZERO_WIDTH_RE = re.compile(r"[\u200b-\u200d\ufeff]")
_LINE_SEPARATOR_RE = re.compile(r"[\u2028\u2029]")


@dataclass(frozen=True)
class Run:
    text: str
    bold: bool = False


def tokenize_bold(line: str) -> List[Run]:
    runs: List[Run] = []
    literal = []
    i, n = 0, len(line)
    while i < n:
        ch = line[i]
        if ch == BOLD_MARK:
            close = line.find(BOLD_MARK, i + 1)
            if close > i + 1:
                if literal:
                    runs.append(Run("".join(literal)))
                    literal = []
                runs.append(Run(line[i + 1:close], bold=True))
                i = close + 1
                continue
        literal.append(ch)
        i += 1
    if literal:
        runs.append(Run("".join(literal)))
    return runs


def has_bold(line: str) -> bool:
    return any(run.bold for run in tokenize_bold(line))


def prepare_text_for_pdf(text: str) -> str:
    """Normalize a line before it is measured and written to the PDF.

    The built-in PDF font has no CJK glyphs, so each ideograph is bracketed
    to leave a visible trace of it.
    """
    result = _CJK_RE.sub(lambda m: f"[{m.group(0)}]", text)
    result = _BULLET_JOINER_RE.sub(BULLET + " ", result)
    result = _ZERO_WIDTH_RE.sub("", result)
    result = _LINE_SEPARATOR_RE.sub("\n", result)
    return result
