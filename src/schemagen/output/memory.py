class InMemorySink:
    """Keeps generated modules in a dict keyed by file name."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.prepared = False

    def prepare(self) -> None:
        self.prepared = True

    def write(self, name: str, content: str) -> None:
        self.files[name] = content
