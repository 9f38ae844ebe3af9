"""
Chord dictionary resource providers shared by all platforms.
"""
from importlib import resources

from .chord_dictionary import ChordDictionaryLoadError
from .constants import Quiz
from .hal_protocol import ChordResourceHAL


class PackageResourceHAL(ChordResourceHAL):
    """Reads the chord dictionary bundled with the chord_quiz package."""

    def __init__(self, package=Quiz.RESOURCE_PACKAGE, name=Quiz.RESOURCE_NAME):
        self.package = package
        self.name = name

    def fetch_text(self):
        try:
            return resources.files(self.package).joinpath(self.name).read_text(
                encoding=Quiz.RESOURCE_ENCODING
            )
        except (OSError, UnicodeDecodeError) as exc:
            raise ChordDictionaryLoadError(Quiz.LOAD_FAILED_PREFIX + str(exc)) from exc


class FileResourceHAL(ChordResourceHAL):
    """Reads the chord dictionary from a file on disk."""

    def __init__(self, path):
        self.path = path

    def fetch_text(self):
        try:
            with open(self.path, "r", encoding=Quiz.RESOURCE_ENCODING) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ChordDictionaryLoadError(Quiz.LOAD_FAILED_PREFIX + str(exc)) from exc
