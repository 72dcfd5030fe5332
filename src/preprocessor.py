"""Text normalization, tokenization and submission crawling."""
import os
import re

from logging_config import get_logger

logger = get_logger('preprocessor')

CJK_RANGE = '\u4e00-\u9fa5'
# No-break spaces (U+00A0, U+2007, U+202F) are not separators and get
# dropped as noise
WHITESPACE = '\t\n\x0b\x0c\r\x1c-\x1f \u1680\u2000-\u2006\u2008-\u200a\u2028\u2029\u205f\u3000'

_cjk_re = re.compile(f'[{CJK_RANGE}]')
_noise_re = re.compile(f'[^{CJK_RANGE}a-zA-Z0-9{WHITESPACE}]+')
_ws_re = re.compile(f'[{WHITESPACE}]+')


def is_blank(text):
    """True for None, empty and whitespace-only text."""
    return text is None or _ws_re.sub('', text) == ''


def normalize(text):
    """
    Keeps CJK ideographs, ASCII letters, ASCII digits and whitespace.
    Every other character is dropped, whitespace runs collapse to one space
    and the result is trimmed. Case is left untouched.
    """
    if is_blank(text):
        return ""
    text = _noise_re.sub('', text)
    return _ws_re.sub(' ', text).strip()


def iter_tokens(normalized_text):
    """
    Yields the token occurrence stream of a normalized text.

    A whitespace-delimited token containing a CJK ideograph is yielded as is,
    followed by each ideograph inside it. Any other token is yielded
    lower-cased as a single unit.
    """
    if not normalized_text:
        return
    for token in normalized_text.split():
        if _cjk_re.search(token):
            yield token
            for char in token:
                if _cjk_re.match(char):
                    yield char
        else:
            yield token.lower()


def tokenize(normalized_text):
    """
    Returns the token set of a normalized text.
    """
    return set(iter_tokens(normalized_text))


def character_set(normalized_text):
    """
    Returns the set of code points of a normalized text, whitespace excluded.
    """
    return {char for char in normalized_text if not char.isspace()}


def crawl_directory(root_path, extensions=('.txt', '.md')):
    """
    Recursively finds text files under root_path.
    Returns a dictionary where keys are submission IDs (first-level folder names)
    and values hold the matching 'text' files and 'all_files' seen.
    """
    submissions = {}

    for root, dirs, files in os.walk(root_path):
        rel_path = os.path.relpath(root, root_path)
        if rel_path == '.':
            # Loose files at the top level do not belong to any submission
            for name in sorted(dirs):
                submissions.setdefault(name, {'text': [], 'all_files': []})
            continue

        submission_id = rel_path.split(os.sep)[0]
        entry = submissions.setdefault(submission_id, {'text': [], 'all_files': []})

        for file in sorted(files):
            ext = os.path.splitext(file)[1].lower()
            full_path = os.path.join(root, file)

            entry['all_files'].append(full_path)
            if ext in extensions:
                entry['text'].append(full_path)

    return submissions


def read_text_file(path):
    """
    Reads a file as UTF-8, ignoring undecodable bytes.
    """
    with open(path, 'r', encoding='utf-8', errors='ignore') as f:
        return f.read()


def load_submission(files):
    """
    Concatenates the text files of one submission, separated by newlines.
    Unreadable files are logged and skipped.
    """
    parts = []
    for path in files:
        try:
            parts.append(read_text_file(path))
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
    return "\n".join(parts)
