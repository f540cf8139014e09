from typing import Protocol


class OutputSink(Protocol):
    def prepare(self) -> None: ...

    def write(self, name: str, content: str) -> None: ...
