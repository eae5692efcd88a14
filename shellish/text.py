import operator

# please leave this copyright notice in binary distributions.
license = """
shellish/text.py
part of the Shellish software package
Copyright 2025 by the Shellish authors
All rights reserved.

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included
in all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE
OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""


def wrap_words(words, margin=79, *, two_spaces=False):
    """
    Combines "words" into lines, and returns the lines
    as a list of str.

    "words" should be an iterable of pre-split words.

    "margin" specifies the maximum length of each line.
    A word longer than the margin gets a line to itself;
    we never break a word.

    If "two_spaces" is true, words that end in sentence-ending
    punctuation ('.', '?', and '!') will be followed by two spaces,
    not one.
    """
    operator.index(margin)
    lines = []
    line = []
    col = 0
    lastword = ''

    for word in words:
        l = len(word)
        if not l:
            continue

        if two_spaces and lastword.endswith(('.', '?', '!')):
            space = "  "
        else:
            space = " "

        if col and ((col + len(space) + l) > margin):
            lines.append("".join(line))
            line.clear()
            col = 0

        if col:
            line.append(space)
            col += len(space)

        line.append(word)
        col += l
        lastword = word

    if line or not lines:
        lines.append("".join(line))
    return lines


def hang(prefix, lines):
    """
    Joins "lines" with newlines, with "prefix" in front
    of the first line and every subsequent line indented
    to line up underneath it.

    Trailing whitespace is stripped from every line.
    """
    indent = " " * len(prefix)
    output = []
    for i, line in enumerate(lines):
        output.append(((indent if i else prefix) + line).rstrip())
    return "\n".join(output)
