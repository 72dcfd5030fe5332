import os


def _env_flag(name):
    return os.getenv(name, '').lower() in ('true', '1', 'yes')


THRESHOLD = float(os.getenv("PLAGIARISM_THRESHOLD", "0.8"))
MAX_INPUT_CHARS = int(os.getenv("PLAGIARISM_MAX_INPUT_CHARS", "1000000"))
SUBMISSION_EXTENSIONS = tuple(
    ext.strip().lower()
    for ext in os.getenv("PLAGIARISM_SUBMISSION_EXTENSIONS", ".txt,.md").split(",")
    if ext.strip()
)
DEBUG = _env_flag("DEBUG")
