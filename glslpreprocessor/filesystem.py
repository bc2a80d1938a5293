import logging

logger = logging.getLogger(__name__)


class FileReader:
    """Reads whole source files as text; None means missing or unreadable."""

    def __init__(self, encoding="utf-8"):
        self.encoding = encoding

    def parent_open(self, path):
        try:
            return open(path, encoding=self.encoding, newline="")
        except OSError:
            return None

    def read(self, path):
        f_obj = self.parent_open(path)
        if f_obj is None:
            logger.warning("Unable to open %s", path)
            return None
        with f_obj:
            try:
                return f_obj.read()
            except (OSError, UnicodeError) as e:
                logger.warning("Unable to read %s: %s", path, e)
                return None


class FakeReader(FileReader):
    """In-memory reader keyed by path, for tests and embedded sources."""

    def __init__(self, files=None):
        super().__init__()
        self.files = dict(files or {})
        self.requested = []

    def read(self, path):
        self.requested.append(path)
        return self.files.get(path)
